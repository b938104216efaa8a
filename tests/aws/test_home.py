import pytest
from botocore.exceptions import ClientError

from sitelift.aws.home import AwsHome

from .fakes import client_error


class FakeSsm:
    def __init__(self, params, error_code=None):
        self.params = params
        self.error_code = error_code
        self.calls = []

    def get_parameter(self, Name, WithDecryption):  # noqa: N803
        self.calls.append((Name, WithDecryption))
        if self.error_code:
            raise client_error(self.error_code, "GetParameter")
        if Name not in self.params:
            raise client_error("ParameterNotFound", "GetParameter")
        return {"Parameter": {"Name": Name, "Value": self.params[Name]}}


class FakeSession:
    def __init__(self, ssm):
        self.ssm = ssm

    def client(self, service_name):
        assert service_name == "ssm"
        return self.ssm


def test_read_param_returns_value():
    ssm = FakeSsm({"/sitelift/blog/prod/site/cname": "d1.cloudfront.net"})

    assert AwsHome(FakeSession(ssm)).read_param("/sitelift/blog/prod/site/cname") == (
        "d1.cloudfront.net"
    )
    assert ssm.calls == [("/sitelift/blog/prod/site/cname", True)]


def test_read_missing_param_returns_none():
    home = AwsHome(FakeSession(FakeSsm({})))

    assert home.read_param("/sitelift/blog/prod/site/cname") is None


def test_read_param_propagates_other_errors():
    home = AwsHome(FakeSession(FakeSsm({}, error_code="AccessDeniedException")))

    with pytest.raises(ClientError):
        home.read_param("/sitelift/blog/prod/site/cname")
