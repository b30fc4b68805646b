# taste/views/message_views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.parsers import JSONParser
from rest_framework import status, permissions

from taste.serializers import ReadMessagesSerializer
from taste.services.messages import read_messages


class ReadMessagesView(APIView):
    """
    POST /api/taste/messages/read/
    Body: { messages: [{channel_name, channel_message_id, ...}] }
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        ser = ReadMessagesSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        stored = read_messages(ser.validated_data["messages"])
        return Response({"count": len(stored)}, status=status.HTTP_200_OK)
