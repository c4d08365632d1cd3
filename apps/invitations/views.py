from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsPrivileged
from apps.attendees.serializers import AttendeeSerializer
from apps.attendees.services import (
    register_via_invitation,
    DuplicateEmailError,
    ProfileValidationError,
)

from .models import Invitation
from .serializers import (
    InvitationSerializer,
    InvitationPublicSerializer,
    InvitationGenerateSerializer,
    InvitationRegisterSerializer,
)
from .services import (
    generate_invitations,
    validate_invitation,
    # Exceptions
    InvitationNotFoundError,
    InvitationAlreadyUsedError,
    InsufficientPermissionsError,
)


@extend_schema(
    parameters=[
        OpenApiParameter('category', str, description='Filter by attendee category'),
        OpenApiParameter('is_used', bool, description='Filter by redemption state'),
    ],
    request=InvitationGenerateSerializer,
    responses={200: InvitationSerializer(many=True), 201: InvitationSerializer(many=True)},
    tags=['invitations'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsPrivileged])
def invitations(request):
    """List invitations or generate a batch of new ones (privileged only)."""
    if request.method == 'GET':
        queryset = Invitation.objects.select_related('created_by')
        category = request.query_params.get('category')
        if category:
            queryset = queryset.filter(attendee_category=category)
        is_used = request.query_params.get('is_used')
        if is_used is not None:
            queryset = queryset.filter(is_used=is_used.lower() == 'true')

        paginator = PageNumberPagination()
        page = paginator.paginate_queryset(queryset, request)
        return paginator.get_paginated_response(InvitationSerializer(page, many=True).data)

    serializer = InvitationGenerateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        created = generate_invitations(
            account=request.user,
            category=serializer.validated_data['attendee_category'],
            count=serializer.validated_data['count'],
        )
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(InvitationSerializer(created, many=True).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: InvitationPublicSerializer},
    description="Check whether an invitation code can still be used.",
    tags=['invitations'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def validate(request, code):
    """Validate an invitation code (public)."""
    try:
        invitation = validate_invitation(code)
    except InvitationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvitationAlreadyUsedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(InvitationPublicSerializer(invitation).data)


@extend_schema(
    request=InvitationRegisterSerializer,
    responses={201: AttendeeSerializer},
    description="Register an attendee with an invitation code.",
    tags=['invitations'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Public registration through an invitation code."""
    serializer = InvitationRegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        attendee = register_via_invitation(
            serializer.validated_data['invitation_code'],
            serializer.validated_data['profile'],
        )
    except ProfileValidationError as e:
        return Response({'error': str(e), 'fields': e.errors}, status=status.HTTP_400_BAD_REQUEST)
    except InvitationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (InvitationAlreadyUsedError, DuplicateEmailError) as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(AttendeeSerializer(attendee).data, status=status.HTTP_201_CREATED)
