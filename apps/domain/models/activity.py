from django.db import models
from django.contrib.auth.models import User
from .document import Document


class DocumentActivity(models.Model):
    document = models.ForeignKey(Document, on_delete=models.CASCADE, related_name='activity')
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='document_activity')
    action = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'document_activity'
        ordering = ['-created_at', '-id']
        verbose_name_plural = 'document activity'

    def __str__(self):
        return f"{self.action} on {self.document_id}"
