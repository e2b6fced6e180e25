from tortoise import fields
from tortoise.models import Model
import uuid


class Race(Model):
    """Completed race archived from a live session."""

    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    name = fields.CharField(max_length=100)
    # Milliseconds
    total_time = fields.FloatField(default=0)
    date = fields.DatetimeField(auto_now_add=True, index=True)
    participant_count = fields.IntField(default=0)
    # List of {"number": int, "time": float}
    laps = fields.JSONField(default=list)

    class Meta:
        table = "races"
