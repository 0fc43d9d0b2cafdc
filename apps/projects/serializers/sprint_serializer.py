from rest_framework import serializers

from apps.projects.models import Sprint


class SprintSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=1, max_length=100)
    goal = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, allow_null=True
    )
    duration_days = serializers.ReadOnlyField()

    class Meta:
        model = Sprint
        fields = [
            "id",
            "project",
            "name",
            "goal",
            "status",
            "start_date",
            "end_date",
            "duration_days",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "project", "duration_days", "created_at", "updated_at"]
        validators = []

    def validate_goal(self, value):
        return value or ""

    def validate(self, attrs):
        start_date = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end_date = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError(
                {"end_date": "End date must be on or after the start date"}
            )
        return attrs
