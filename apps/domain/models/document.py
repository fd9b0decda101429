from django.db import models
from django.contrib.auth.models import User


class Document(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    file_url = models.CharField(max_length=500, blank=True, null=True)
    file_name = models.CharField(max_length=255, blank=True, null=True)
    # storage path returned by the upload endpoint
    file_path = models.CharField(max_length=500, blank=True, null=True)
    created_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='documents')
    requires_admin_approval = models.BooleanField(default=False)
    # None while the admin decision is still pending
    admin_approved = models.BooleanField(blank=True, null=True)
    admin_approved_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_documents',
    )
    admin_approved_at = models.DateTimeField(blank=True, null=True)
    status = models.CharField(max_length=50, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'documents'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_by'], name='idx_documents_created_by'),
            models.Index(fields=['status'], name='idx_documents_status'),
            models.Index(fields=['file_path'], name='idx_documents_file_path'),
        ]

    def __str__(self):
        return f"{self.name} ({self.status})"
