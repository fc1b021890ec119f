import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.expenses.models import Expense


# =============================================================================
# Expense API Tests
# =============================================================================

@pytest.mark.django_db
class TestExpenseList:
    """Tests for GET /api/trips/{trip_id}/expenses/"""

    def test_list_expenses(self, owner_client, trip, expense, split_expense):
        url = reverse('expenses:expense-list', args=[trip.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['expenses']) == 2
        fuel = next(e for e in response.data['expenses'] if e['description'] == 'Fuel')
        assert fuel['payer_name'] == 'Bob'
        assert {s['member_name'] for s in fuel['splits']} == {'Alice', 'Carol'}

    def test_list_as_viewer(self, viewer_client, trip, expense):
        url = reverse('expenses:expense-list', args=[trip.id])
        response = viewer_client.get(url)

        assert response.status_code == status.HTTP_200_OK

    def test_list_unauthenticated(self, api_client, trip):
        url = reverse('expenses:expense-list', args=[trip.id])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_trip_not_found(self, owner_client):
        url = reverse('expenses:expense-list', args=[uuid4()])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestExpenseCreate:
    """Tests for POST /api/trips/{trip_id}/expenses/"""

    def test_create_expense(self, editor_client, trip, members):
        alice, bob, carol = members
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {
            'payer_id': str(alice.id),
            'amount': 1000,
            'description': 'Dinner',
            'splits': [
                {'member_id': str(alice.id), 'share_type': 'amount', 'share_value': 200},
                {'member_id': str(bob.id), 'share_type': 'percentage', 'share_value': 10},
                {'member_id': str(carol.id)},
            ],
        }
        response = editor_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['expense']['amount'] == 1000
        assert response.data['expense']['is_standalone'] is True
        assert len(response.data['expense']['splits']) == 3

    def test_create_for_item(self, owner_client, trip, members, item):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {'payer_id': str(members[0].id), 'amount': 500, 'item_id': str(item.id)}
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['expense']['item_title'] == item.title

    def test_create_as_viewer_forbidden(self, viewer_client, trip, members):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {'payer_id': str(members[0].id), 'amount': 500}
        response = viewer_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Expense.objects.exists()

    def test_create_zero_amount(self, owner_client, trip, members):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {'payer_id': str(members[0].id), 'amount': 0}
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_unknown_payer(self, owner_client, trip, members):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {'payer_id': str(uuid4()), 'amount': 500}
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_create_duplicate_split_member(self, owner_client, trip, members):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {
            'payer_id': str(members[0].id),
            'amount': 500,
            'splits': [{'member_id': str(members[1].id)}, {'member_id': str(members[1].id)}],
        }
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'splits' in response.data

    def test_create_percentage_above_hundred(self, owner_client, trip, members):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {
            'payer_id': str(members[0].id),
            'amount': 500,
            'splits': [{'member_id': str(members[1].id), 'share_type': 'percentage', 'share_value': 150}],
        }
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_amount_split_without_value(self, owner_client, trip, members):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {
            'payer_id': str(members[0].id),
            'amount': 500,
            'splits': [{'member_id': str(members[1].id), 'share_type': 'amount'}],
        }
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_item_of_other_trip(self, owner_client, trip, members, other_trip):
        url = reverse('expenses:expense-list', args=[trip.id])
        data = {
            'payer_id': str(members[0].id),
            'amount': 500,
            'item_id': str(other_trip.items.first().id),
        }
        response = owner_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestExpenseDetail:
    """Tests for /api/trips/{trip_id}/expenses/{id}/ and .../splits/"""

    def test_retrieve(self, viewer_client, trip, expense):
        url = reverse('expenses:expense-detail', args=[trip.id, expense.id])
        response = viewer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['expense']['payer_name'] == 'Alice'

    def test_retrieve_not_found(self, owner_client, trip):
        url = reverse('expenses:expense-detail', args=[trip.id, uuid4()])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_amount(self, editor_client, trip, expense):
        url = reverse('expenses:expense-detail', args=[trip.id, expense.id])
        response = editor_client.patch(url, {'amount': 1500}, format='json')

        assert response.status_code == status.HTTP_200_OK
        expense.refresh_from_db()
        assert expense.amount == 1500
        assert expense.description == 'Groceries'

    def test_patch_unlinks_item(self, owner_client, trip, members, item):
        expense = Expense.objects.create(trip=trip, payer=members[0], amount=100, source_item=item)
        url = reverse('expenses:expense-detail', args=[trip.id, expense.id])
        response = owner_client.patch(url, {'item_id': None}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['expense']['is_standalone'] is True

    def test_replace_splits(self, owner_client, trip, members, split_expense):
        url = reverse('expenses:expense-splits', args=[trip.id, split_expense.id])
        data = {'splits': [{'member_id': str(members[2].id), 'share_type': 'amount', 'share_value': 600}]}
        response = owner_client.put(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['expense']['splits']) == 1
        assert response.data['expense']['splits'][0]['share_value'] == 600

    def test_delete(self, owner_client, trip, split_expense):
        url = reverse('expenses:expense-detail', args=[trip.id, split_expense.id])
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Expense.objects.filter(id=split_expense.id).exists()

    def test_delete_as_viewer_forbidden(self, viewer_client, trip, expense):
        url = reverse('expenses:expense-detail', args=[trip.id, expense.id])
        response = viewer_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Item Expense API Tests
# =============================================================================

@pytest.mark.django_db
class TestItemExpenseAPI:
    """Tests for /api/trips/{trip_id}/items/{item_id}/expense/"""

    def test_get_without_expense(self, owner_client, trip, item):
        url = reverse('expenses:item-expense', args=[trip.id, item.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['expense'] is None

    def test_put_uses_item_cost(self, owner_client, trip, members, item):
        url = reverse('expenses:item-expense', args=[trip.id, item.id])
        response = owner_client.put(url, {'payer_id': str(members[1].id)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['expense']['amount'] == 900
        assert response.data['expense']['payer_name'] == 'Bob'

    def test_put_without_cost_or_amount(self, owner_client, trip, members, item_without_cost):
        url = reverse('expenses:item-expense', args=[trip.id, item_without_cost.id])
        response = owner_client.put(url, {'payer_id': str(members[1].id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_put_then_delete(self, owner_client, trip, members, item):
        url = reverse('expenses:item-expense', args=[trip.id, item.id])
        owner_client.put(url, {'payer_id': str(members[0].id), 'amount': 450}, format='json')

        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Expense.objects.filter(source_item=item).exists()

    def test_item_not_found(self, owner_client, trip):
        url = reverse('expenses:item-expense', args=[trip.id, uuid4()])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Settlement API Tests
# =============================================================================

@pytest.mark.django_db
class TestSettlementAPI:
    """Tests for GET /api/trips/{trip_id}/settlement/"""

    def test_report_shape(self, owner_client, trip, expense):
        url = reverse('expenses:settlement', args=[trip.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        data = response.data
        assert set(data.keys()) == {'members', 'balances', 'settlements', 'total_expenses'}
        assert [m['name'] for m in data['members']] == ['Alice', 'Bob', 'Carol']
        assert set(data['balances'][0].keys()) == {
            'member_id', 'member_name', 'total_paid', 'total_owed', 'balance'
        }
        assert data['total_expenses'] == 900

        transfer = data['settlements'][0]
        assert set(transfer.keys()) == {'from', 'from_name', 'to', 'to_name', 'amount'}
        assert transfer['to_name'] == 'Alice'
        assert transfer['amount'] == 300

    def test_three_member_greedy(self, owner_client, trip, members):
        alice, bob, carol = members
        tickets = Expense.objects.create(trip=trip, payer=carol, amount=500, description='Tickets')
        tickets.splits.create(member=alice, share_type='amount', share_value=300)
        tickets.splits.create(member=bob, share_type='amount', share_value=200)

        url = reverse('expenses:settlement', args=[trip.id])
        response = owner_client.get(url)

        settlements = [(t['from_name'], t['to_name'], t['amount']) for t in response.data['settlements']]
        assert settlements == [('Alice', 'Carol', 300), ('Bob', 'Carol', 200)]

    def test_empty_trip(self, owner_client, trip):
        url = reverse('expenses:settlement', args=[trip.id])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'members': [],
            'balances': [],
            'settlements': [],
            'total_expenses': 0,
        }

    def test_share_token_read(self, api_client, trip, share_token, expense):
        url = reverse('expenses:settlement', args=[trip.id])
        response = api_client.get(url, {'token': share_token.token})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_expenses'] == 900

    def test_unknown_token(self, api_client, trip):
        url = reverse('expenses:settlement', args=[trip.id])
        response = api_client.get(url, {'token': 'nope'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_trip_not_found(self, owner_client):
        url = reverse('expenses:settlement', args=[uuid4()])
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
