from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from apps.slots.services import SlotTotalBelowUsageError, InvalidSlotCountError

from .models import User
from .permissions import IsAccountAdmin
from .serializers import (
    UserSerializer,
    UserLoginSerializer,
    AccountCreateSerializer,
    AccountUpdateSerializer,
    RoleChangeSerializer,
)
from .services import (
    authenticate_user,
    create_account,
    update_account,
    change_role,
    delete_account,
    # Exceptions
    InvalidCredentialsError,
    InactiveAccountError,
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientPermissionsError,
    SelfDeletionError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError:
        return Response({
            'error': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError:
        return Response({
            'error': 'Account is deactivated'
        }, status=status.HTTP_403_FORBIDDEN)

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current account with its slot overview.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated account."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=AccountCreateSerializer,
    responses={
        200: UserSerializer(many=True),
        201: UserSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="List accounts or create a new one (Admin only).",
    tags=['accounts'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAccountAdmin])
def accounts(request):
    """List or create accounts."""
    if request.method == 'GET':
        queryset = User.objects.prefetch_related('slot_allocations').order_by('email')
        role = request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        return Response(UserSerializer(queryset, many=True).data)

    serializer = AccountCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        account = create_account(created_by=request.user, **serializer.validated_data)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except DuplicateAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except (SlotTotalBelowUsageError, InvalidSlotCountError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(account).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=AccountUpdateSerializer,
    responses={
        200: UserSerializer,
        204: None,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Update an account's details or slot totals, or delete the account (Admin only).",
    tags=['accounts'],
)
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAccountAdmin])
def account_detail(request, pk):
    """Update or delete an account."""
    if request.method == 'DELETE':
        try:
            delete_account(account_id=pk, deleted_by=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except SelfDeletionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except AccountNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = AccountUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    try:
        account = update_account(account_id=pk, updated_by=request.user, **serializer.validated_data)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except AccountNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (SlotTotalBelowUsageError, InvalidSlotCountError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(account).data)


@extend_schema(
    request=RoleChangeSerializer,
    responses={
        200: UserSerializer,
        404: ErrorResponseSerializer,
    },
    description="Change an account's system role (Admin only).",
    tags=['accounts'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAccountAdmin])
def account_role(request, pk):
    """Change account role."""
    serializer = RoleChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        account = change_role(account_id=pk, new_role=serializer.validated_data['role'], changed_by=request.user)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except AccountNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(UserSerializer(account).data)
