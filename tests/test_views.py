import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.authtoken.models import Token
from apps.domain.models import Document, Signatory


@pytest.mark.django_db
class TestAuthViews:
    def test_signup_creates_member_profile(self, api_client):
        data = {
            'email': 'New.Member@Example.com',
            'password': 'longenough123',
            'full_name': 'New Member'
        }

        response = api_client.post('/api/auth/signup/', data, format='json')

        assert response.status_code == 201
        assert response.data['token']
        assert response.data['profile']['email'] == 'new.member@example.com'
        assert response.data['profile']['full_name'] == 'New Member'
        assert response.data['profile']['role'] == 'member'

    def test_signup_rejects_duplicate_email(self, api_client, user):
        data = {'email': 'member@example.com', 'password': 'longenough123'}

        response = api_client.post('/api/auth/signup/', data, format='json')

        assert response.status_code == 400

    def test_obtain_token(self, api_client, user):
        response = api_client.post(
            '/api/auth/token/',
            {'username': 'member@example.com', 'password': 'testpass123'},
            format='json'
        )

        assert response.status_code == 200
        assert response.data['token'] == Token.objects.get(user=user).key
        assert response.data['profile']['role'] == 'member'

    def test_obtain_token_invalid_credentials(self, api_client, user):
        response = api_client.post(
            '/api/auth/token/',
            {'username': 'member@example.com', 'password': 'wrong'},
            format='json'
        )

        assert response.status_code == 400
        assert response.data['error'] == 'Invalid credentials'

    def test_obtain_token_missing_fields(self, api_client):
        response = api_client.post('/api/auth/token/', {'username': 'member@example.com'}, format='json')

        assert response.status_code == 400

    def test_obtain_token_non_string_username(self, api_client, user):
        response = api_client.post('/api/auth/token/', {'username': 12345, 'password': 'testpass123'}, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Please provide username and password'

    def test_me(self, club_admin_client):
        response = club_admin_client.get('/api/auth/me/')

        assert response.status_code == 200
        assert response.data['full_name'] == 'Club Admin'
        assert response.data['role'] == 'admin'

    def test_logout_revokes_token(self, member_client, user):
        response = member_client.post('/api/auth/logout/')

        assert response.status_code == 204
        assert not Token.objects.filter(user=user).exists()
        assert member_client.get('/api/auth/me/').status_code == 401


@pytest.mark.django_db
class TestUploadView:
    def test_upload_file(self, member_client, user):
        upload = SimpleUploadedFile('field-trip.pdf', b'%PDF-1.4 test', content_type='application/pdf')

        response = member_client.post('/api/uploads/', {'file': upload}, format='multipart')

        assert response.status_code == 201
        assert response.data['name'] == 'field-trip.pdf'
        assert response.data['path'].startswith(f'{user.id}/')
        assert response.data['url'].endswith(response.data['path'])

    def test_upload_rejects_unsupported_type(self, member_client):
        upload = SimpleUploadedFile('budget.xlsx', b'data')

        response = member_client.post('/api/uploads/', {'file': upload}, format='multipart')

        assert response.status_code == 400
        assert 'Unsupported file type' in response.data['error']

    def test_upload_rejects_oversized_file(self, settings, member_client):
        settings.MAX_UPLOAD_SIZE = 16
        upload = SimpleUploadedFile('field-trip.pdf', b'x' * 17)

        response = member_client.post('/api/uploads/', {'file': upload}, format='multipart')

        assert response.status_code == 400

    def test_upload_requires_auth(self, api_client):
        upload = SimpleUploadedFile('field-trip.pdf', b'%PDF')

        response = api_client.post('/api/uploads/', {'file': upload}, format='multipart')

        assert response.status_code == 401

    def test_remove_own_upload(self, member_client):
        upload = SimpleUploadedFile('field-trip.pdf', b'%PDF')
        path = member_client.post('/api/uploads/', {'file': upload}, format='multipart').data['path']

        response = member_client.delete('/api/uploads/', {'path': path}, format='json')

        assert response.status_code == 200
        assert response.data['removed'] is True

    def test_cannot_remove_other_members_upload(self, other_client, user):
        response = other_client.delete('/api/uploads/', {'path': f'{user.id}/1718000000000.pdf'}, format='json')

        assert response.status_code == 403

    def test_remove_rejects_traversal_path(self, member_client, other_client):
        upload = SimpleUploadedFile('field-trip.pdf', b'%PDF')
        path = other_client.post('/api/uploads/', {'file': upload}, format='multipart').data['path']

        response = member_client.delete('/api/uploads/', {'path': f'0/../{path}'}, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Invalid upload path'
        assert other_client.delete('/api/uploads/', {'path': path}, format='json').data['removed'] is True

    def test_cannot_remove_attached_upload(self, member_client):
        upload = SimpleUploadedFile('field-trip.pdf', b'%PDF')
        reference = member_client.post('/api/uploads/', {'file': upload}, format='multipart').data
        member_client.post('/api/documents/', {'name': 'Field Trip Form', 'file': reference}, format='json')

        response = member_client.delete('/api/uploads/', {'path': reference['path']}, format='json')

        assert response.status_code == 409
        assert Document.objects.get().file_path == reference['path']


@pytest.mark.django_db
class TestDocumentViewSet:
    def test_create_document(self, member_client, file_reference):
        data = {
            'name': 'Field Trip Form',
            'description': 'Spring trip',
            'file': file_reference,
            'signatories': [
                {'name': 'A. Dean', 'position': 'Dean'},
                {'name': ''},
                {'name': 'B. Principal', 'position': 'Principal'}
            ]
        }

        response = member_client.post('/api/documents/', data, format='json')

        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        assert response.data['created_by_user']['full_name'] == 'member'
        assert [s['name'] for s in response.data['signatories']] == ['A. Dean', 'B. Principal']
        assert response.data['progress'] == {'signed': 0, 'total': 2, 'percentage': 0}

    def test_create_document_without_file(self, member_client):
        response = member_client.post('/api/documents/', {'name': 'Field Trip Form'}, format='json')

        assert response.status_code == 400
        assert Document.objects.count() == 0

    def test_create_document_short_name(self, member_client, file_reference):
        response = member_client.post('/api/documents/', {'name': 'ab', 'file': file_reference}, format='json')

        assert response.status_code == 400
        assert Document.objects.count() == 0

    def test_list_documents(self, member_client, document, approval_document):
        response = member_client.get('/api/documents/')

        assert response.status_code == 200
        assert response.data['count'] == 2
        assert response.data['results'][0]['id'] == approval_document.id

    def test_filter_by_status(self, member_client, document, approval_document):
        Document.objects.filter(pk=document.pk).update(status='completed')

        response = member_client.get('/api/documents/?status=completed')

        assert response.status_code == 200
        assert [d['id'] for d in response.data['results']] == [document.id]

    def test_list_requires_auth(self, api_client):
        response = api_client.get('/api/documents/')

        assert response.status_code == 401

    def test_get_document(self, other_client, document, signatories):
        response = other_client.get(f'/api/documents/{document.id}/')

        assert response.status_code == 200
        assert response.data['id'] == document.id
        assert [s['order_index'] for s in response.data['signatories']] == [0, 1]

    def test_get_missing_document(self, member_client):
        response = member_client.get('/api/documents/9999/')

        assert response.status_code == 404

    def test_delete_document(self, member_client, document, signatories):
        response = member_client.delete(f'/api/documents/{document.id}/')

        assert response.status_code == 204
        assert not Document.objects.filter(pk=document.pk).exists()
        assert Signatory.objects.count() == 0

    def test_delete_document_forbidden_for_other_member(self, other_client, document):
        response = other_client.delete(f'/api/documents/{document.id}/')

        assert response.status_code == 403
        assert Document.objects.filter(pk=document.pk).exists()


@pytest.mark.django_db
class TestApprovalAction:
    def test_admin_rejects(self, club_admin_client, approval_document):
        response = club_admin_client.post(
            f'/api/documents/{approval_document.id}/approval/',
            {'approved': False},
            format='json'
        )

        assert response.status_code == 200
        assert response.data['admin_approved'] is False
        assert response.data['status'] == 'rejected'

    def test_member_cannot_decide(self, member_client, approval_document):
        response = member_client.post(
            f'/api/documents/{approval_document.id}/approval/',
            {'approved': True},
            format='json'
        )

        assert response.status_code == 403

    def test_second_decision_rejected(self, club_admin_client, approval_document):
        url = f'/api/documents/{approval_document.id}/approval/'
        club_admin_client.post(url, {'approved': True}, format='json')

        response = club_admin_client.post(url, {'approved': False}, format='json')

        assert response.status_code == 400

    def test_document_without_approval_flag(self, club_admin_client, document):
        response = club_admin_client.post(f'/api/documents/{document.id}/approval/', {'approved': True}, format='json')

        assert response.status_code == 400


@pytest.mark.django_db
class TestSignatoryViewSet:
    def test_list_signatories(self, member_client, document, signatories):
        response = member_client.get(f'/api/documents/{document.id}/signatories/')

        assert response.status_code == 200
        assert [s['name'] for s in response.data] == ['A. Dean', 'B. Principal']

    def test_list_signatories_missing_document(self, member_client):
        response = member_client.get('/api/documents/9999/signatories/')

        assert response.status_code == 404

    def test_get_signatory(self, member_client, document, signatories):
        response = member_client.get(f'/api/documents/{document.id}/signatories/{signatories[0].id}/')

        assert response.status_code == 200
        assert response.data['id'] == signatories[0].id

    def test_toggle_until_completed(self, member_client, document, signatories):
        for signatory in signatories:
            response = member_client.post(
                f'/api/documents/{document.id}/signatories/{signatory.id}/toggle/',
                {'is_signed': True, 'notes': 'Signed in person'},
                format='json'
            )
            assert response.status_code == 200

        assert response.data['signatory']['is_signed'] is True
        assert response.data['signatory']['signed_at'] is not None
        assert response.data['document']['status'] == 'completed'
        assert response.data['document']['progress']['percentage'] == 100

    def test_toggle_forbidden_for_other_member(self, other_client, document, signatories):
        response = other_client.post(
            f'/api/documents/{document.id}/signatories/{signatories[0].id}/toggle/',
            {'is_signed': True},
            format='json'
        )

        assert response.status_code == 403

    def test_toggle_signatory_of_other_document(self, member_client, approval_document, signatories):
        response = member_client.post(
            f'/api/documents/{approval_document.id}/signatories/{signatories[0].id}/toggle/',
            {'is_signed': True},
            format='json'
        )

        assert response.status_code == 404


@pytest.mark.django_db
class TestCommentsAndActivity:
    def test_add_and_list_comments(self, other_client, document):
        url = f'/api/documents/{document.id}/comments/'

        response = other_client.post(url, {'comment': 'Please sign before Friday'}, format='json')
        assert response.status_code == 201
        assert response.data['user']['full_name'] == 'other'

        other_client.post(url, {'comment': 'Reminder sent'}, format='json')
        response = other_client.get(url)

        assert response.status_code == 200
        assert [c['comment'] for c in response.data] == ['Reminder sent', 'Please sign before Friday']

    def test_blank_comment(self, member_client, document):
        response = member_client.post(f'/api/documents/{document.id}/comments/', {'comment': '   '}, format='json')

        assert response.status_code == 400

    def test_activity_log(self, member_client, document, signatories):
        member_client.post(
            f'/api/documents/{document.id}/signatories/{signatories[0].id}/toggle/',
            {'is_signed': True},
            format='json'
        )

        response = member_client.get(f'/api/documents/{document.id}/activity/')

        assert response.status_code == 200
        assert response.data[0]['action'] == 'signature_marked'
        assert response.data[0]['description'] == 'Marked A. Dean as signed'
        assert response.data[0]['user']['id'] == document.created_by_id


@pytest.mark.django_db
class TestHealthCheck:
    def test_health_check(self, api_client):
        response = api_client.get('/health/')

        assert response.status_code == 200
        assert response.data['status'] == 'ok'
        assert response.data['database'] == 'healthy'
        assert response.data['storage_backend'] == 'django'
