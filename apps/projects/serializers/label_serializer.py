from rest_framework import serializers

from apps.projects.models import Label


class LabelSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=1, max_length=50)

    class Meta:
        model = Label
        fields = ["id", "project", "name", "color", "created_at"]
        read_only_fields = ["id", "project", "created_at"]
        # Uniqueness per project is checked in the viewset, which knows the project
        validators = []

    def validate_color(self, value):
        return value.upper()
