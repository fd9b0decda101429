import logging
from django.contrib.auth import authenticate
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample
from drf_spectacular.types import OpenApiTypes
from apps.presentation.serializers import SignupSerializer, UserProfileSerializer

logger = logging.getLogger('apps')


@extend_schema(
    summary='Sign up',
    description='Creates an account and its member profile. The role defaults to "member".',
    tags=['Auth'],
    request=SignupSerializer,
    responses={201: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT},
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup(request):
    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    token, _ = Token.objects.get_or_create(user=user)
    logger.info(f'User {user.pk} signed up')
    return Response({
        'token': token.key,
        'profile': UserProfileSerializer(user.profile).data,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    summary='Sign in',
    description='Authenticates with username (or e-mail) and password and returns a token plus the member profile. '
                'Send the token as "Authorization: Token <token>".',
    tags=['Auth'],
    request={
        'application/json': {
            'type': 'object',
            'properties': {
                'username': {'type': 'string', 'example': 'member@example.com'},
                'password': {'type': 'string', 'format': 'password'},
            },
            'required': ['username', 'password']
        }
    },
    responses={200: OpenApiTypes.OBJECT, 400: OpenApiTypes.OBJECT},
    examples=[
        OpenApiExample(
            'Signed in',
            value={
                'token': '9944b09199c62bcf9418ad846dd0e4bbdfc6ee4b',
                'profile': {'id': 1, 'email': 'member@example.com', 'full_name': 'Club Member', 'role': 'member'}
            },
            response_only=True
        )
    ],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def obtain_auth_token(request):
    username = request.data.get('username') or request.data.get('email')
    password = request.data.get('password')

    if not isinstance(username, str) or not isinstance(password, str):
        return Response(
            {'error': 'Please provide username and password'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user = authenticate(username=username.strip(), password=password)

    if not user:
        return Response(
            {'error': 'Invalid credentials'},
            status=status.HTTP_400_BAD_REQUEST
        )

    token, created = Token.objects.get_or_create(user=user)
    return Response({
        'token': token.key,
        'profile': UserProfileSerializer(user.profile).data,
    }, status=status.HTTP_200_OK)


@extend_schema(
    summary='Sign out',
    description='Deletes the token of the current session.',
    tags=['Auth'],
    request=None,
    responses={204: None},
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    Token.objects.filter(user=request.user).delete()
    logger.info(f'User {request.user.pk} signed out')
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    summary='Current profile',
    tags=['Auth'],
    responses={200: UserProfileSerializer},
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(UserProfileSerializer(request.user.profile).data, status=status.HTTP_200_OK)
