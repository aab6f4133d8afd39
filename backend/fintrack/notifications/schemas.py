from pydantic import Field

from fintrack.storage.entities import ApiModel


class NotificationSchema(ApiModel):
    message: str = Field(min_length=1)
