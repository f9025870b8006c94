from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # the browser client speaks camelCase; python code uses snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FetchRequest(CamelModel):
    urls: Union[list[str], str]     # list, or one URL per line
    fetch_type: Literal["rt", "broken", "seo"] = "rt"


class LinkRecordSchema(CamelModel):
    original_url: str
    destination_url: str
    status_code: int
    error: Optional[str] = None
    redirected: bool = False


class SeedResultSchema(CamelModel):
    source_url: str
    fetch_type: str
    status: str                      # success | error
    status_code: int = 0

    # rt
    fetched_urls: Optional[list[str]] = None
    destination_urls: Optional[list[LinkRecordSchema]] = None

    # broken
    total_links: Optional[int] = None
    broken_links: Optional[list[LinkRecordSchema]] = None

    # seo
    duplicate_descriptions: Optional[list[str]] = None

    error: Optional[str] = None


class FetchResponse(CamelModel):
    success: bool = True
    results: list[SeedResultSchema]


class DescriptionCheckResponse(CamelModel):
    success: bool = True
    has_duplicate_description: bool
    duplicates: list[str]


class ErrorResponse(CamelModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
