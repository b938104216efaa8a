from sitelift.app import SiteliftApp
from sitelift.aws.s3 import StaticWebsite
from sitelift.config import AwsConfig, SiteliftAppConfig

app = SiteliftApp("static-site")

CERTIFICATE_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/replace-me"


@app.config
def configuration(env: str) -> SiteliftAppConfig:
    return SiteliftAppConfig(
        aws=AwsConfig(
            # region="us-east-1",        # Uncomment to override AWS CLI/env var region
            profile=None                 # Set to a string to override AWS CLI/env var profile
        ),
        environments=["prod"],
    )


@app.run
def run() -> None:
    StaticWebsite(
        "landing",
        path="public",
        domain=["www.example.com", "example.com"],
        certificate=CERTIFICATE_ARN,
        error_page="404.html",
        redirect_to_main_domain=True,
    )
