"""
Zone info models — the per-instance JSON descriptor served by the zone hosts.
"""

from pydantic import BaseModel, ConfigDict, Field


class ZoneInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    zone: str = ""
    message: str = ""
    endpoint: str = ""
    stream: str = Field(default="", alias="releaseStream")


class ZoneInfoResponse(BaseModel):
    zoneinfo: ZoneInfo
