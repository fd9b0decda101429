import logging
from typing import Dict, List, Optional
from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.utils import timezone
from apps.domain.models import Document, Signatory, DocumentActivity, DocumentComment
from apps.domain.session import MemberSession, can_manage_document, can_decide_approval
from apps.domain.status import compute_document_status, signature_progress, SignatureProgress

logger = logging.getLogger('apps')


class DocumentService:
    def create_document(
        self,
        session: MemberSession,
        name: str,
        file: Optional[Dict],
        description: Optional[str] = None,
        requires_admin_approval: bool = False,
        signatories: Optional[List[Dict]] = None,
    ) -> Document:
        name = (name or '').strip()
        min_length = getattr(settings, 'DOCUMENT_NAME_MIN_LENGTH', 3)
        if len(name) < min_length:
            raise ValueError(f'Name must be at least {min_length} characters')

        if not file or not file.get('url') or not file.get('name'):
            raise ValueError('Please upload a document file')

        signatories_data = [
            signatory for signatory in (signatories or [])
            if (signatory.get('name') or '').strip()
        ]

        # an empty signatory list counts as fully signed
        initial_status = compute_document_status(
            Document.STATUS_PENDING,
            [False] * len(signatories_data),
            requires_admin_approval,
            None,
        )

        with transaction.atomic():
            document = Document.objects.create(
                name=name,
                description=(description or '').strip() or None,
                file_url=file['url'],
                file_name=file['name'],
                file_path=(file.get('path') or '').strip() or None,
                created_by_id=session.user_id,
                requires_admin_approval=requires_admin_approval,
                status=initial_status,
            )

            Signatory.objects.bulk_create([
                Signatory(
                    document=document,
                    name=signatory_data['name'].strip(),
                    position=(signatory_data.get('position') or '').strip() or None,
                    email=(signatory_data.get('email') or '').strip() or None,
                    phone=(signatory_data.get('phone') or '').strip() or None,
                    order_index=index,
                    is_signed=False,
                )
                for index, signatory_data in enumerate(signatories_data)
            ])

            self.log_activity(
                document,
                session,
                'created',
                'Document tracker created',
                {'signatories': len(signatories_data)},
            )

        logger.info(f'Document {document.id} created by user {session.user_id} with {len(signatories_data)} signatories')
        return document

    def toggle_signature(
        self,
        session: MemberSession,
        signatory: Signatory,
        is_signed: bool,
        notes: Optional[str] = None,
    ) -> Signatory:
        with transaction.atomic():
            document = Document.objects.select_for_update().get(pk=signatory.document_id)
            if not can_manage_document(session, document):
                raise PermissionDenied('Only the document creator or an admin can update signatures')

            signatory.is_signed = is_signed
            signatory.signed_at = timezone.now() if is_signed else None
            signatory.notes = (notes or '').strip() or None
            signatory.save(update_fields=['is_signed', 'signed_at', 'notes', 'updated_at'])

            previous_status, new_status = self._refresh_status(document)

            self.log_activity(
                document,
                session,
                'signature_marked' if is_signed else 'signature_unmarked',
                f'Marked {signatory.name} as {"signed" if is_signed else "not signed"}',
                {
                    'signatory_id': signatory.id,
                    'previous_status': previous_status,
                    'status': new_status,
                },
            )

        logger.info(f'Signatory {signatory.id} of document {document.id} marked as {"signed" if is_signed else "not signed"} ({previous_status} -> {new_status})')
        return signatory

    def record_admin_decision(self, session: MemberSession, document: Document, approved: bool) -> Document:
        with transaction.atomic():
            document = Document.objects.select_for_update().get(pk=document.pk)

            if not document.requires_admin_approval:
                raise ValueError('This document does not require admin approval')

            if not can_decide_approval(session, document):
                raise PermissionDenied('Only admins can approve or reject documents')

            if document.admin_approved is not None:
                raise ValueError('The admin decision for this document has already been recorded')

            document.admin_approved = approved
            document.admin_approved_by_id = session.user_id
            document.admin_approved_at = timezone.now()
            document.save(update_fields=['admin_approved', 'admin_approved_by', 'admin_approved_at', 'updated_at'])

            previous_status, new_status = self._refresh_status(document)

            self.log_activity(
                document,
                session,
                'admin_approved' if approved else 'admin_rejected',
                f'Document {"approved" if approved else "rejected"} by admin',
                {'previous_status': previous_status, 'status': new_status},
            )

        logger.info(f'Document {document.id} {"approved" if approved else "rejected"} by admin {session.user_id}')
        return document

    def add_comment(self, session: MemberSession, document: Document, text: str) -> DocumentComment:
        text = (text or '').strip()
        if not text:
            raise ValueError('Comment cannot be empty')

        with transaction.atomic():
            comment = DocumentComment.objects.create(
                document=document,
                user_id=session.user_id,
                comment=text,
            )
            self.log_activity(document, session, 'comment_added', 'Added a comment', {'comment_id': comment.id})

        return comment

    def delete_document(self, session: MemberSession, document: Document) -> None:
        if not can_manage_document(session, document):
            raise PermissionDenied('Only the document creator or an admin can delete this document')

        document_id = document.id
        document.delete()
        logger.info(f'Document {document_id} deleted by user {session.user_id}')

    def list_comments(self, document: Document):
        return document.comments.select_related('user__profile').order_by('-created_at', '-id')

    def list_activity(self, document: Document):
        return document.activity.select_related('user__profile').order_by('-created_at', '-id')

    def get_progress(self, document: Document) -> SignatureProgress:
        return signature_progress(document.signatories.values_list('is_signed', flat=True))

    def log_activity(
        self,
        document: Document,
        session: Optional[MemberSession],
        action: str,
        description: str,
        metadata: Optional[Dict] = None,
    ) -> DocumentActivity:
        return DocumentActivity.objects.create(
            document=document,
            user_id=session.user_id if session else None,
            action=action,
            description=description,
            metadata=metadata or {},
        )

    def _refresh_status(self, document: Document):
        """Recompute the document status from the stored signatories and save it if it changed."""
        previous_status = document.status
        signed_flags = list(document.signatories.values_list('is_signed', flat=True))
        new_status = compute_document_status(
            previous_status,
            signed_flags,
            document.requires_admin_approval,
            document.admin_approved,
        )

        if new_status != previous_status:
            document.status = new_status
            document.save(update_fields=['status', 'updated_at'])

        return previous_status, new_status
