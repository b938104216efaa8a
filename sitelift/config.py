from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class AwsConfig:
    """AWS configuration for sitelift.

    Both profile and region are optional overrides. When not specified, sitelift follows
    the standard AWS credential and region resolution chain used by boto3 and Pulumi
    (environment variables, SSO, shared credentials/config files, instance roles).

    ## Profile Selection

    1. Explicit `profile` parameter (this config)
    2. AWS_PROFILE environment variable
    3. "default" profile from ~/.aws files (if exists)

    ## Region Selection

    1. Explicit `region` parameter (this config)
    2. AWS_REGION or AWS_DEFAULT_REGION environment variable
    3. Region from selected profile in ~/.aws/config

    ## Examples

    Use different profiles per stage:
    ```python
    @app.config
    def config(env: str) -> SiteliftAppConfig:
        if env == "prod":
            return SiteliftAppConfig(aws=AwsConfig(profile="prod-profile"))
        return SiteliftAppConfig(aws=AwsConfig())
    ```
    """

    profile: str | None = None
    region: str | None = None


@dataclass(frozen=True, kw_only=True)
class SiteliftAppConfig:
    """sitelift app configuration.

    Attributes:
        aws: AWS credentials and region configuration.
        environments: List of shared environment names (e.g., ["staging", "production"]).
    """

    aws: AwsConfig = field(default_factory=AwsConfig)
    environments: list[str] = field(default_factory=list)

    def is_valid_environment(self, env: str, username: str) -> bool:
        return env == username or env in self.environments
