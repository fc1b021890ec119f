"""
Expenses app services layer.

The ledger, balance calculation and settlement optimizer are pure
computations over plain values; expense management is the write side.
"""

from .exceptions import (
    ExpensesServiceError,
    ExpenseNotFoundError,
    InvalidExpenseAmountError,
    InvalidSplitError,
    UnknownMemberError,
)

from .ledger import (
    LedgerMember,
    LedgerEntry,
    EqualShare,
    PercentageShare,
    AmountShare,
    share_rule_from_row,
    validate_entry,
    load_members,
    load_ledger,
)

from .balance_calculation import (
    MemberBalance,
    apportion,
    calculate_balances,
)

from .settlement_optimizer import (
    Transfer,
    SETTLED_THRESHOLD,
    suggest_settlements,
)

from .settlement_report import (
    SettlementReport,
    build_settlement_report,
    get_settlement_report,
)

from .expense_management import (
    UNCHANGED,
    get_expense,
    list_trip_expenses,
    create_expense,
    update_expense,
    replace_expense_splits,
    delete_expense,
    get_item_expense,
    set_item_expense,
    clear_item_expense,
)


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'ExpenseNotFoundError',
    'InvalidExpenseAmountError',
    'InvalidSplitError',
    'UnknownMemberError',

    # Ledger
    'LedgerMember',
    'LedgerEntry',
    'EqualShare',
    'PercentageShare',
    'AmountShare',
    'share_rule_from_row',
    'validate_entry',
    'load_members',
    'load_ledger',

    # Balances
    'MemberBalance',
    'apportion',
    'calculate_balances',

    # Settlement
    'Transfer',
    'SETTLED_THRESHOLD',
    'suggest_settlements',
    'SettlementReport',
    'build_settlement_report',
    'get_settlement_report',

    # Expense Management
    'UNCHANGED',
    'get_expense',
    'list_trip_expenses',
    'create_expense',
    'update_expense',
    'replace_expense_splits',
    'delete_expense',
    'get_item_expense',
    'set_item_expense',
    'clear_item_expense',
]
