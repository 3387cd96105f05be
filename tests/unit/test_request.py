from urllib.parse import parse_qsl, urlsplit

import pytest

from acs_sdk_core import (
    AccessKeyCredential,
    BearerTokenCredential,
    BearerTokenSigner,
    ClientException,
    FormatType,
    MethodType,
    ProtocolType,
    RoaRequest,
    RpcRequest,
    ShaHmac1Signer,
    StsTokenCredential,
)
from acs_sdk_core.auth import composer

CREDENTIAL = AccessKeyCredential("testid", "testsecret")


@pytest.fixture(autouse=True)
def pinned_clock(monkeypatch):
    monkeypatch.setattr(composer, "new_nonce", lambda: "nonce-1")
    monkeypatch.setattr(composer, "rpc_timestamp_now", lambda: "2026-01-01T00:00:00Z")
    monkeypatch.setattr(composer, "http_date_now", lambda: "Thu, 01 Jan 2026 00:00:00 GMT")


def rpc_request(**kwargs) -> RpcRequest:
    return RpcRequest(
        "Ecs",
        "2014-05-26",
        "DescribeRegions",
        method=kwargs.pop("method", "GET"),
        region_id=kwargs.pop("region_id", "cn-hangzhou"),
        accept_format=kwargs.pop("accept_format", "JSON"),
        **kwargs,
    )


def query_of(url: str) -> dict[str, str]:
    return dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))


class TestBuilder:
    def test_setters_chain(self):
        request = RpcRequest("Ecs", "2014-05-26", "DescribeInstances")
        result = (
            request.set_region_id("cn-beijing")
            .set_method("post")
            .set_accept_format("xml")
            .set_protocol("http")
            .add_query_param("PageSize", 10)
            .add_domain_param("Tag", "a")
            .add_header("x-custom", "1")
        )
        assert result is request
        assert request.region_id == "cn-beijing"
        assert request.method is MethodType.POST
        assert request.accept_format is FormatType.XML
        assert request.protocol is ProtocolType.HTTP
        assert request.query_params == {"PageSize": 10}
        assert request.domain_params == {"Tag": "a"}
        assert request.headers == {"x-custom": "1"}

    def test_unset_fields_are_none(self):
        request = RpcRequest("Ecs", "2014-05-26", "DescribeInstances")
        assert request.method is None
        assert request.region_id is None
        assert request.accept_format is None
        assert request.protocol is None

    def test_accessors_return_copies(self):
        request = rpc_request().add_query_param("A", "1")
        request.query_params["B"] = "2"
        assert request.query_params == {"A": "1"}

    def test_requires_product_and_action(self):
        with pytest.raises(ValueError):
            RpcRequest("", "2014-05-26", "DescribeRegions")
        with pytest.raises(ValueError):
            RpcRequest("Ecs", "2014-05-26", "")


class TestBody:
    def test_domain_params_are_form_encoded(self):
        request = rpc_request().add_domain_param("Name", "a b").add_domain_param("On", True)
        assert request.body() == b"Name=a+b&On=true"

    def test_domain_params_win_over_content(self):
        request = rpc_request().set_content("raw").add_domain_param("A", "1")
        assert request.body() == b"A=1"

    def test_form_body_replaces_raw_content_type(self):
        request = (
            rpc_request(method="POST")
            .set_content('{"a": 1}', "application/json")
            .add_domain_param("Name", "x")
        )
        composed = request.compose(
            ShaHmac1Signer(), CREDENTIAL, "ecs.cn-hangzhou.aliyuncs.com", ProtocolType.HTTPS
        )
        assert composed.body == b"Name=x"
        assert composed.headers == {"Content-Type": "application/x-www-form-urlencoded"}
        assert request.headers["Content-Type"] == "application/json"

    def test_raw_content(self):
        request = rpc_request().set_content('{"a": 1}', "application/json")
        assert request.body() == b'{"a": 1}'
        assert request.headers["Content-Type"] == "application/json"

    def test_no_body(self):
        assert rpc_request().body() is None


class TestRpcCompose:
    def test_url_and_system_params(self):
        composed = rpc_request().add_query_param("PageSize", 50).compose(
            ShaHmac1Signer(), CREDENTIAL, "ecs.cn-hangzhou.aliyuncs.com", ProtocolType.HTTPS
        )
        assert composed.method == "GET"
        assert composed.url.startswith("https://ecs.cn-hangzhou.aliyuncs.com/?")
        params = query_of(composed.url)
        assert params["Action"] == "DescribeRegions"
        assert params["Version"] == "2014-05-26"
        assert params["RegionId"] == "cn-hangzhou"
        assert params["Format"] == "JSON"
        assert params["AccessKeyId"] == "testid"
        assert params["SignatureMethod"] == "HMAC-SHA1"
        assert params["SignatureVersion"] == "1.0"
        assert params["SignatureNonce"] == "nonce-1"
        assert params["Timestamp"] == "2026-01-01T00:00:00Z"
        assert params["PageSize"] == "50"

    def test_signature_covers_query_and_body(self):
        request = rpc_request(method="POST").add_domain_param("InstanceName", "web 1")
        composed = request.compose(ShaHmac1Signer(), CREDENTIAL, "ecs.example.com")

        params = query_of(composed.url)
        signature = params.pop("Signature")
        params["InstanceName"] = "web 1"
        expected = ShaHmac1Signer().sign_string(
            composer.rpc_string_to_sign("POST", params), "testsecret"
        )
        assert signature == expected
        assert composed.body == b"InstanceName=web+1"

    def test_signature_is_last_and_percent_encoded(self):
        composed = rpc_request().compose(ShaHmac1Signer(), CREDENTIAL, "ecs.example.com")
        tail = composed.url.rsplit("&", 1)[1]
        assert tail.startswith("Signature=")
        assert "+" not in tail and "/" not in tail.split("=", 1)[1]

    def test_security_token(self):
        composed = rpc_request().compose(
            ShaHmac1Signer(), StsTokenCredential("id", "secret", "sts"), "ecs.example.com"
        )
        assert query_of(composed.url)["SecurityToken"] == "sts"

    def test_bearer_token(self):
        composed = rpc_request().compose(
            BearerTokenSigner(), BearerTokenCredential("bearer"), "ecs.example.com"
        )
        params = query_of(composed.url)
        assert params["BearerToken"] == "bearer"
        assert params["SignatureType"] == "BEARERTOKEN"
        assert params["Signature"] == ""
        assert "AccessKeyId" not in params
        assert "SignatureMethod" not in params

    def test_raw_format_sends_no_format_param(self):
        composed = rpc_request(accept_format="RAW").compose(
            ShaHmac1Signer(), CREDENTIAL, "ecs.example.com"
        )
        assert "Format" not in query_of(composed.url)

    def test_none_values_are_sent_empty(self):
        request = rpc_request(method="POST").add_query_param("Opt", None)
        request.add_domain_param("Tag", None)
        composed = request.compose(ShaHmac1Signer(), CREDENTIAL, "ecs.example.com")

        params = query_of(composed.url)
        assert params["Opt"] == ""
        assert "None" not in composed.url
        assert composed.body == b"Tag="

        signature = params.pop("Signature")
        params["Tag"] = ""
        expected = ShaHmac1Signer().sign_string(
            composer.rpc_string_to_sign("POST", params), "testsecret"
        )
        assert signature == expected

    def test_fresh_nonce_per_compose(self, monkeypatch):
        nonces = iter(["n1", "n2"])
        monkeypatch.setattr(composer, "new_nonce", lambda: next(nonces))
        request = rpc_request()
        first = request.compose(ShaHmac1Signer(), CREDENTIAL, "ecs.example.com")
        second = request.compose(ShaHmac1Signer(), CREDENTIAL, "ecs.example.com")
        assert query_of(first.url)["Signature"] != query_of(second.url)["Signature"]
        assert request.query_params == {}

    def test_unresolved_request_is_rejected(self):
        request = RpcRequest("Ecs", "2014-05-26", "DescribeRegions")
        with pytest.raises(ClientException, match="must be resolved"):
            request.compose(ShaHmac1Signer(), CREDENTIAL, "ecs.example.com")


class TestRoaCompose:
    def roa_request(self) -> RoaRequest:
        return RoaRequest(
            "CS",
            "2015-12-15",
            "DescribeClusterNodes",
            uri_pattern="/clusters/[ClusterId]/nodes",
            method="GET",
            region_id="cn-hangzhou",
            accept_format="JSON",
        ).add_path_param("ClusterId", "c-1")

    def test_url(self):
        request = self.roa_request()
        request.add_query_param("pageSize", 10)
        composed = request.compose(ShaHmac1Signer(), CREDENTIAL, "cs.aliyuncs.com", ProtocolType.HTTP)
        assert composed.url == "http://cs.aliyuncs.com/clusters/c-1/nodes?pageSize=10"

    def test_signed_headers(self):
        composed = self.roa_request().compose(ShaHmac1Signer(), CREDENTIAL, "cs.aliyuncs.com")
        headers = composed.headers
        assert headers["Date"] == "Thu, 01 Jan 2026 00:00:00 GMT"
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert headers["x-acs-version"] == "2015-12-15"
        assert headers["x-acs-region-id"] == "cn-hangzhou"
        assert headers["x-acs-signature-nonce"] == "nonce-1"
        assert headers["x-acs-signature-method"] == "HMAC-SHA1"
        assert "Content-MD5" not in headers

        string_to_sign = composer.roa_string_to_sign(
            "GET", {k: v for k, v in headers.items() if k != "Authorization"}, "/clusters/c-1/nodes"
        )
        signature = ShaHmac1Signer().sign_string(string_to_sign, "testsecret")
        assert headers["Authorization"] == f"acs testid:{signature}"

    def test_body_gets_content_md5(self):
        request = self.roa_request().set_method("POST").set_content('{"a":1}', "application/json")
        composed = request.compose(ShaHmac1Signer(), CREDENTIAL, "cs.aliyuncs.com")
        assert composed.body == b'{"a":1}'
        assert composed.headers["Content-MD5"] == composer.content_md5(b'{"a":1}')
        assert composed.headers["Content-Type"] == "application/json"

    def test_security_token_header(self):
        composed = self.roa_request().compose(
            ShaHmac1Signer(), StsTokenCredential("id", "secret", "sts"), "cs.aliyuncs.com"
        )
        assert composed.headers["x-acs-security-token"] == "sts"

    def test_bearer_token_has_no_authorization(self):
        composed = self.roa_request().compose(
            BearerTokenSigner(), BearerTokenCredential("bearer"), "cs.aliyuncs.com"
        )
        assert composed.headers["x-acs-bearer-token"] == "bearer"
        assert composed.headers["x-acs-signature-type"] == "BEARERTOKEN"
        assert "Authorization" not in composed.headers

    def test_domain_params_send_form_content_type(self):
        request = self.roa_request().set_method("POST")
        request.set_content('{"a": 1}', "application/json").add_domain_param("Name", "x")
        composed = request.compose(ShaHmac1Signer(), CREDENTIAL, "cs.aliyuncs.com")
        assert composed.body == b"Name=x"
        assert composed.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert [k for k in composed.headers if k.lower() == "content-type"] == ["Content-Type"]

    def test_compose_does_not_mutate_headers(self):
        request = self.roa_request()
        request.compose(ShaHmac1Signer(), CREDENTIAL, "cs.aliyuncs.com")
        assert request.headers == {}
