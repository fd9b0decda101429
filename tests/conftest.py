import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework.authtoken.models import Token
from apps.domain.models import UserProfile, Document, Signatory
from apps.domain.session import MemberSession
from apps.infrastructure.storage.factory import StorageFactory


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    settings.OBJECT_STORAGE_BACKEND = 'django'
    StorageFactory().clear_cache()
    yield settings.MEDIA_ROOT
    StorageFactory().clear_cache()


@pytest.fixture
def user():
    return User.objects.create_user(
        username='member@example.com',
        email='member@example.com',
        password='testpass123'
    )


@pytest.fixture
def other_user():
    return User.objects.create_user(
        username='other@example.com',
        email='other@example.com',
        password='testpass123'
    )


@pytest.fixture
def club_admin():
    admin = User.objects.create_user(
        username='admin@example.com',
        email='admin@example.com',
        password='testpass123',
        first_name='Club',
        last_name='Admin'
    )
    admin.profile.role = UserProfile.ROLE_ADMIN
    admin.profile.save()
    return admin


@pytest.fixture
def session(user):
    return MemberSession.from_user(user)


@pytest.fixture
def other_session(other_user):
    return MemberSession.from_user(other_user)


@pytest.fixture
def club_admin_session(club_admin):
    return MemberSession.from_user(club_admin)


@pytest.fixture
def file_reference(user):
    return {
        'name': 'field-trip.pdf',
        'url': f'/media/{user.id}/1718000000000.pdf',
        'path': f'{user.id}/1718000000000.pdf',
    }


@pytest.fixture
def document(user):
    return Document.objects.create(
        name='Field Trip Form',
        file_url='/media/1/1718000000000.pdf',
        file_name='field-trip.pdf',
        created_by=user,
        status='pending'
    )


@pytest.fixture
def signatories(document):
    return [
        Signatory.objects.create(document=document, name='A. Dean', position='Dean', order_index=0),
        Signatory.objects.create(document=document, name='B. Principal', position='Principal', order_index=1),
    ]


@pytest.fixture
def approval_document(user):
    document = Document.objects.create(
        name='Budget Approval Request',
        file_url='/media/1/1718000000001.pdf',
        file_name='budget.pdf',
        created_by=user,
        requires_admin_approval=True,
        status='pending'
    )
    Signatory.objects.create(document=document, name='Treasurer', order_index=0)
    Signatory.objects.create(document=document, name='President', order_index=1)
    return document


@pytest.fixture
def api_client():
    return APIClient()


def _client_for(user):
    client = APIClient()
    token = Token.objects.create(user=user)
    client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')
    return client


@pytest.fixture
def member_client(user):
    return _client_for(user)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)


@pytest.fixture
def club_admin_client(club_admin):
    return _client_for(club_admin)
