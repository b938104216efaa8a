from dataclasses import dataclass
from typing import final

from sitelift.aws.types import CloudFrontEventType


@final
@dataclass(frozen=True)
class EdgeFunctionSpec:
    name: str
    event_type: CloudFrontEventType
    code: str
