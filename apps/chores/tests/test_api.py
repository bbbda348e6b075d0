import pytest
from django.urls import reverse
from rest_framework import status
from apps.chores.services import create_chore


@pytest.mark.django_db
class TestChoreApi:

    def test_create_chore(self, member_client, room, member):
        data = {
            'room': str(room.id),
            'title': 'Water plants',
            'assigned_to': str(member.id),
            'frequency': 'weekly',
        }
        response = member_client.post(reverse('chores:chore-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['assigned_to_name'] == 'Bob'
        assert response.data['completed'] is False

    def test_create_chore_outsider(self, other_client, room):
        data = {'room': str(room.id), 'title': 'Nope'}
        response = other_client.post(reverse('chores:chore-list'), data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_and_filter(self, member_client, room, member, owner_user):
        create_chore(room_id=room.id, title='Dishes', created_by=owner_user)
        url = reverse('chores:chore-list')

        everything = member_client.get(url, {'room': str(room.id)})
        completed = member_client.get(url, {'completed': 'true'})

        assert len(everything.data) == 1
        assert len(completed.data) == 0

    def test_complete_and_reopen(self, member_client, room, member, owner_user):
        chore = create_chore(room_id=room.id, title='Dishes', created_by=owner_user)

        response = member_client.post(reverse('chores:chore-complete', kwargs={'pk': chore.id}))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['completed'] is True

        response = member_client.post(reverse('chores:chore-complete', kwargs={'pk': chore.id}))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = member_client.post(reverse('chores:chore-reopen', kwargs={'pk': chore.id}))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['completed'] is False

    def test_outsider_cannot_see_chore(self, other_client, room, owner_user):
        chore = create_chore(room_id=room.id, title='Dishes', created_by=owner_user)

        response = other_client.post(reverse('chores:chore-complete', kwargs={'pk': chore.id}))
        assert response.status_code == status.HTTP_404_NOT_FOUND
