from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Post
from .serializers import PostSerializer


class PostListView(APIView):
    def get(self, request, *args, **kwargs):
        return Response(PostSerializer(Post.objects.all(), many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = PostSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Missing fields"}, status=status.HTTP_400_BAD_REQUEST)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)
