from django.contrib import admin
from .models import UserProfile, Document, Signatory, DocumentActivity, DocumentComment


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'email', 'role', 'created_at']
    list_filter = ['role', 'created_at']
    search_fields = ['full_name', 'email', 'user__username']
    readonly_fields = ['created_at', 'updated_at']


class SignatoryInline(admin.TabularInline):
    model = Signatory
    extra = 0
    fields = ['order_index', 'name', 'position', 'email', 'phone', 'is_signed', 'signed_at', 'notes']
    readonly_fields = ['signed_at']


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_by', 'status', 'requires_admin_approval', 'admin_approved', 'created_at']
    list_filter = ['status', 'requires_admin_approval', 'admin_approved', 'created_at']
    search_fields = ['name', 'description', 'file_name']
    readonly_fields = ['status', 'admin_approved_by', 'admin_approved_at', 'created_at', 'updated_at']
    inlines = [SignatoryInline]
    fieldsets = (
        ('Document', {
            'fields': ('name', 'description', 'file_name', 'file_url', 'file_path', 'created_by')
        }),
        ('Approval', {
            'fields': ('requires_admin_approval', 'admin_approved', 'admin_approved_by', 'admin_approved_at')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Dates', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Signatory)
class SignatoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'position', 'document', 'order_index', 'is_signed', 'signed_at']
    list_filter = ['is_signed', 'created_at']
    search_fields = ['name', 'email', 'document__name']
    readonly_fields = ['signed_at', 'created_at', 'updated_at']


@admin.register(DocumentActivity)
class DocumentActivityAdmin(admin.ModelAdmin):
    list_display = ['document', 'user', 'action', 'created_at']
    list_filter = ['action', 'created_at']
    search_fields = ['document__name', 'description']
    readonly_fields = ['document', 'user', 'action', 'description', 'metadata', 'created_at']


@admin.register(DocumentComment)
class DocumentCommentAdmin(admin.ModelAdmin):
    list_display = ['document', 'user', 'created_at']
    search_fields = ['document__name', 'comment']
    readonly_fields = ['created_at', 'updated_at']
