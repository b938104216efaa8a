from typing import Literal

# CloudFront Functions can only be attached to viewer events
type CloudFrontEventType = Literal["viewer-request", "viewer-response"]
