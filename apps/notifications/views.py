from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import NotificationSerializer
from .services import (
    list_notifications,
    unread_count,
    mark_as_read,
    mark_all_as_read,
    NotificationNotFoundError,
)


class NotificationPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    responses={200: NotificationSerializer(many=True)},
    description="List the current account's notifications, newest first.",
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """List notifications; ``?unread=true`` limits to unread ones."""
    unread_only = request.query_params.get('unread', '').lower() in ('1', 'true', 'yes')
    queryset = list_notifications(account=request.user, unread_only=unread_only)

    paginator = NotificationPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = NotificationSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(tags=['notifications'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_unread_count(request):
    """Number of unread notifications."""
    return Response({'unread': unread_count(account=request.user)})


@extend_schema(responses={200: NotificationSerializer}, tags=['notifications'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notification_mark_read(request, pk):
    """Mark one notification as read."""
    try:
        notification = mark_as_read(notification_id=pk, account=request.user)
    except NotificationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(NotificationSerializer(notification).data)


@extend_schema(tags=['notifications'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notification_mark_all_read(request):
    """Mark every unread notification as read."""
    updated = mark_all_as_read(account=request.user)
    return Response({'updated': updated})
