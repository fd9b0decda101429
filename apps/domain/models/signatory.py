from django.db import models
from .document import Document


class Signatory(models.Model):
    document = models.ForeignKey(Document, on_delete=models.CASCADE, related_name='signatories')
    name = models.CharField(max_length=255)
    position = models.CharField(max_length=255, blank=True, null=True)
    email = models.EmailField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)
    is_signed = models.BooleanField(default=False)
    signed_at = models.DateTimeField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    order_index = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'document_signatories'
        ordering = ['order_index', 'id']
        verbose_name_plural = 'signatories'

    def __str__(self):
        state = 'signed' if self.is_signed else 'not signed'
        return f"{self.name} ({state})"
