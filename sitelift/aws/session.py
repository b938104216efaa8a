import boto3
from botocore.config import Config

from sitelift.config import AwsConfig

# Worker pool size for file transfers. The HTTP connection pool is sized to match so
# concurrent uploads never wait on a connection.
DEFAULT_CONCURRENCY = 16

# botocore "standard" mode only retries transient errors (throttling, 5xx, timeouts)
MAX_ATTEMPTS = 5

CLIENT_CONFIG = Config(
    retries={"max_attempts": MAX_ATTEMPTS, "mode": "standard"},
    max_pool_connections=DEFAULT_CONCURRENCY,
)


def create_session(aws: AwsConfig) -> boto3.Session:
    return boto3.Session(profile_name=aws.profile, region_name=aws.region)


def s3_client(session: boto3.Session):  # noqa: ANN201
    return session.client("s3", config=CLIENT_CONFIG)


def cloudfront_client(session: boto3.Session):  # noqa: ANN201
    return session.client("cloudfront", config=CLIENT_CONFIG)
