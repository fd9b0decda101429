from django.db import models
from django.contrib.auth.models import User
from .document import Document


class DocumentComment(models.Model):
    document = models.ForeignKey(Document, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='document_comments')
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'document_comments'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Comment by {self.user_id} on {self.document_id}"
