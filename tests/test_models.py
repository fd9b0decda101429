import pytest
from django.contrib.auth.models import User
from apps.domain.models import UserProfile, Document, Signatory, DocumentActivity, DocumentComment


@pytest.mark.django_db
class TestUserProfile:
    def test_profile_created_with_account(self):
        user = User.objects.create_user(username='jane@example.com', email='jane@example.com', password='x')
        profile = UserProfile.objects.get(user=user)
        assert profile.role == 'member'
        assert profile.full_name == 'jane'
        assert profile.email == 'jane@example.com'

    def test_profile_uses_full_name_when_present(self, club_admin):
        assert club_admin.profile.full_name == 'Club Admin'
        assert club_admin.profile.is_admin is True

    def test_profile_not_duplicated_on_save(self, user):
        user.first_name = 'Changed'
        user.save()
        assert UserProfile.objects.filter(user=user).count() == 1


@pytest.mark.django_db
class TestDocument:
    def test_create_document_defaults(self, user):
        document = Document.objects.create(name='Event Permission Letter', created_by=user)
        assert document.status == 'pending'
        assert document.requires_admin_approval is False
        assert document.admin_approved is None
        assert document.admin_approved_by is None

    def test_delete_cascades_to_children(self, document, signatories, user):
        DocumentActivity.objects.create(document=document, user=user, action='created')
        DocumentComment.objects.create(document=document, user=user, comment='Looks good')

        document.delete()

        assert Signatory.objects.count() == 0
        assert DocumentActivity.objects.count() == 0
        assert DocumentComment.objects.count() == 0


@pytest.mark.django_db
class TestSignatory:
    def test_signatories_ordered_by_order_index(self, document):
        Signatory.objects.create(document=document, name='Second', order_index=1)
        Signatory.objects.create(document=document, name='First', order_index=0)

        names = list(document.signatories.values_list('name', flat=True))
        assert names == ['First', 'Second']

    def test_signatory_defaults(self, document):
        signatory = Signatory.objects.create(document=document, name='A. Dean')
        assert signatory.is_signed is False
        assert signatory.signed_at is None
        assert signatory.order_index == 0
