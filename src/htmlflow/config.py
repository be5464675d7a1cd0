from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable


def new_uuid() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ConverterConfig:
    schema_type: str = "@webflow/XscpData"
    created_by: str = "61f14380242f626709f24c30"
    html_parser: str = "html.parser"
    wrap_sections: bool = True
    section_container_class: str = "container"
    id_factory: Callable[[], str] = new_uuid
