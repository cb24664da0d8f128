from typing import Annotated

from fastapi import Query

LimitParam = Annotated[int, Query(ge=1, le=100, description="Page size")]
OffsetParam = Annotated[int, Query(ge=0, description="Rows to skip")]
