from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsPrivileged
from apps.slots.services import InsufficientSlotsError

from .serializers import (
    AttendeeSerializer,
    ManualRegistrationSerializer,
    BulkImportSerializer,
    BatchResultSerializer,
    StatusChangeSerializer,
)
from .services import (
    register_manually,
    import_batch,
    change_attendee_status,
    get_attendees,
    export_filename,
    write_attendees_csv,
    # Exceptions
    DuplicateEmailError,
    ProfileValidationError,
    AttendeeNotFoundError,
    InsufficientPermissionsError,
    CompensationFailureError,
)


@extend_schema(
    parameters=[
        OpenApiParameter('category', str, description='Filter by attendee category'),
        OpenApiParameter('status', str, description='Filter by review status'),
    ],
    request=ManualRegistrationSerializer,
    responses={200: AttendeeSerializer(many=True), 201: AttendeeSerializer},
    tags=['attendees'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def attendees(request):
    """List attendees or register one manually (charged to the current account's slots)."""
    if request.method == 'GET':
        queryset = get_attendees(
            account=request.user,
            category=request.query_params.get('category'),
            status=request.query_params.get('status'),
        )
        paginator = PageNumberPagination()
        page = paginator.paginate_queryset(queryset, request)
        return paginator.get_paginated_response(AttendeeSerializer(page, many=True).data)

    serializer = ManualRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        attendee = register_manually(
            account=request.user,
            category=serializer.validated_data['category'],
            profile_data=serializer.validated_data['profile'],
        )
    except ProfileValidationError as e:
        return Response({'error': str(e), 'fields': e.errors}, status=status.HTTP_400_BAD_REQUEST)
    except (DuplicateEmailError, InsufficientSlotsError) as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(AttendeeSerializer(attendee).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=BulkImportSerializer,
    responses={201: BatchResultSerializer, 400: BatchResultSerializer},
    description=(
        "Register a batch of attendees. Either every row is created or none is; "
        "rejected rows are reported with their 0-based index."
    ),
    tags=['attendees'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def bulk_import(request):
    """All-or-nothing bulk registration."""
    serializer = BulkImportSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = import_batch(account=request.user, rows=serializer.validated_data['rows'])
    except InsufficientSlotsError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except CompensationFailureError as e:
        return Response({
            'error': str(e),
            'unreverted': [str(attendee.pk) for attendee in e.unreverted],
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    data = BatchResultSerializer(result).data
    if not result.succeeded:
        return Response(data, status=status.HTTP_400_BAD_REQUEST)
    return Response(data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=StatusChangeSerializer,
    responses={200: AttendeeSerializer},
    tags=['attendees'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPrivileged])
def attendee_status(request, pk):
    """Change an attendee's review status (privileged only)."""
    serializer = StatusChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        attendee = change_attendee_status(
            attendee_id=pk,
            new_status=serializer.validated_data['status'],
            changed_by=request.user,
        )
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except AttendeeNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(AttendeeSerializer(attendee).data)


@extend_schema(
    parameters=[
        OpenApiParameter('category', str, description='Filter by attendee category'),
        OpenApiParameter('status', str, description='Filter by review status'),
    ],
    responses={(200, 'text/csv'): str},
    description="Download the filtered attendee list as CSV (privileged only).",
    tags=['attendees'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPrivileged])
def export_attendees(request):
    """CSV export of attendees."""
    queryset = get_attendees(
        account=request.user,
        category=request.query_params.get('category'),
        status=request.query_params.get('status'),
    )

    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{export_filename()}"'
    write_attendees_csv(queryset.iterator(), response)
    return response
