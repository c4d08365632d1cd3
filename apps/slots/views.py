from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsPrivileged

from .serializers import (
    SlotSummarySerializer,
    SlotRequestSerializer,
    SlotRequestCreateSerializer,
    SlotRequestDecisionSerializer,
)
from .services import (
    slot_summary,
    create_slot_request,
    decide_slot_request,
    get_slot_requests,
    # Exceptions
    InvalidSlotCountError,
    SlotRequestNotFoundError,
    SlotRequestAlreadyDecidedError,
    InsufficientPermissionsError,
)


@extend_schema(
    responses={200: SlotSummarySerializer(many=True)},
    description="Registration slots of the current account per category.",
    tags=['slots'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_slots(request):
    """Get the current account's slot overview."""
    serializer = SlotSummarySerializer(slot_summary(request.user), many=True)
    return Response(serializer.data)


@extend_schema(
    request=SlotRequestCreateSerializer,
    responses={200: SlotRequestSerializer(many=True), 201: SlotRequestSerializer},
    tags=['slots'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def slot_requests(request):
    """List slot requests or submit a new one."""
    if request.method == 'GET':
        queryset = get_slot_requests(account=request.user, status=request.query_params.get('status'))
        return Response(SlotRequestSerializer(queryset, many=True).data)

    serializer = SlotRequestCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        slot_request = create_slot_request(
            account=request.user,
            requested_slots=serializer.validated_data['requested_slots'],
            reason=serializer.validated_data['reason'],
        )
    except InvalidSlotCountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SlotRequestSerializer(slot_request).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=SlotRequestDecisionSerializer,
    responses={200: SlotRequestSerializer},
    tags=['slots'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPrivileged])
def decide_request(request, pk):
    """Approve or decline a pending slot request (privileged only)."""
    serializer = SlotRequestDecisionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        slot_request = decide_slot_request(
            request_id=pk,
            decided_by=request.user,
            approve=serializer.validated_data['approve'],
        )
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except SlotRequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SlotRequestAlreadyDecidedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(SlotRequestSerializer(slot_request).data)
