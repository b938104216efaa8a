import boto3
from botocore.exceptions import ClientError


class AwsHome:
    """AWS implementation of Home - SSM Parameter Store for params."""

    def __init__(self, session: boto3.Session) -> None:
        self._ssm = session.client("ssm")

    def read_param(self, name: str) -> str | None:
        try:
            response = self._ssm.get_parameter(Name=name, WithDecryption=True)
            return response["Parameter"]["Value"]
        except ClientError as e:
            if e.response["Error"]["Code"] == "ParameterNotFound":
                return None
            raise
