from django.urls import path, include
from rest_framework.routers import DefaultRouter
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from .views import DocumentViewSet, SignatoryViewSet
from .auth_views import signup, obtain_auth_token, logout, me
from .uploads import uploads

router = DefaultRouter()
router.register(r'documents', DocumentViewSet, basename='document')

urlpatterns = [
    path('auth/signup/', signup, name='auth-signup'),
    path('auth/token/', obtain_auth_token, name='auth-token'),
    path('auth/logout/', logout, name='auth-logout'),
    path('auth/me/', me, name='auth-me'),
    path('uploads/', uploads, name='uploads'),
    path('schema/', SpectacularAPIView.as_view(), name='schema'),
    path('docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('', include(router.urls)),
    path('documents/<int:document_pk>/signatories/', SignatoryViewSet.as_view({
        'get': 'list'
    }), name='document-signatories'),
    path('documents/<int:document_pk>/signatories/<int:pk>/', SignatoryViewSet.as_view({
        'get': 'retrieve'
    }), name='signatory-detail'),
    path('documents/<int:document_pk>/signatories/<int:pk>/toggle/', SignatoryViewSet.as_view({
        'post': 'toggle'
    }), name='signatory-toggle'),
]
