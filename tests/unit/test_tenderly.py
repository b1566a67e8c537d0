"""Unit tests for the Tenderly verification client."""

import json
from typing import Any, Dict

import pytest
import requests
import responses

from solidity_deployer.exceptions import VerificationSubmissionError
from solidity_deployer.payloads import to_tenderly_request
from solidity_deployer.verifiers import TenderlyVerifier

API_URL = "https://api.tenderly.example.com/api/v1"
ADDRESS = "0xAbCdEf0123456789aBcDeF0123456789ABCDEF01"
ADD_URL = f"{API_URL}/account/acme/project/protocol/address"
VERIFY_URL = f"{API_URL}/accounts/acme/projects/protocol/contracts/verify"


@pytest.fixture
def payload(verification_request) -> Dict[str, Any]:
    return to_tenderly_request(verification_request, "v0.8.18")


@pytest.fixture
def verifier() -> TenderlyVerifier:
    return TenderlyVerifier("secret", "acme", "protocol", network="sepolia", api_url=API_URL)


class TestTenderlyVerifierInit:
    """Test TenderlyVerifier construction."""

    @pytest.mark.parametrize(
        "access_key,account,project",
        [("", "acme", "protocol"), ("secret", "", "protocol"), ("secret", "acme", "")],
    )
    def test_requires_credentials(self, access_key, account, project):
        with pytest.raises(ValueError, match="Tenderly access key"):
            TenderlyVerifier(access_key, account, project)

    def test_network_id(self, verifier):
        assert verifier.network_id == "11155111"

    def test_trailing_slash_stripped(self):
        verifier = TenderlyVerifier("secret", "acme", "protocol", api_url=f"{API_URL}/")
        assert verifier.api_url == API_URL


class TestVerifyContract:
    """Test the add-then-verify flow."""

    async def test_adds_then_verifies(self, verifier, payload, counter_source):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.POST, ADD_URL, json={}, status=200)
            rsps.add(responses.POST, VERIFY_URL, json={"contracts": []}, status=200)

            await verifier.verify_contract(ADDRESS, "Counter", payload)

            assert [call.request.url for call in rsps.calls] == [ADD_URL, VERIFY_URL]
            add_body = json.loads(rsps.calls[0].request.body)
            verify_body = json.loads(rsps.calls[1].request.body)
            headers = [call.request.headers for call in rsps.calls]

        assert all(h["X-Access-Key"] == "secret" for h in headers)
        assert add_body == {
            "network_id": "11155111",
            "address": ADDRESS.lower(),
            "display_name": "Counter",
        }
        assert verify_body == {
            "config": {"mode": "public"},
            "contracts": [
                {
                    "contractToVerify": "contracts/Counter.sol:Counter",
                    "sources": {"contracts/Counter.sol": {"content": counter_source}},
                    "compiler": {
                        "version": "v0.8.18",
                        "settings": {"optimizer": {"enabled": True, "runs": 200}},
                    },
                    "networks": {"11155111": {"address": ADDRESS.lower()}},
                }
            ],
        }

    async def test_add_failure_skips_verify(self, verifier, payload):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.POST, ADD_URL, body="Unauthorized", status=401)

            with pytest.raises(VerificationSubmissionError, match="status 401") as exc_info:
                await verifier.verify_contract(ADDRESS, "Counter", payload)

            assert len(rsps.calls) == 1

        assert exc_info.value.backend == "tenderly"
        assert exc_info.value.address == ADDRESS

    async def test_verify_http_error(self, verifier, payload):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.POST, ADD_URL, json={}, status=200)
            rsps.add(responses.POST, VERIFY_URL, body="Internal Server Error", status=500)

            with pytest.raises(VerificationSubmissionError, match="status 500"):
                await verifier.verify_contract(ADDRESS, "Counter", payload)

    async def test_error_in_json_body(self, verifier, payload):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.POST, ADD_URL, json={}, status=200)
            rsps.add(
                responses.POST,
                VERIFY_URL,
                json={"error": {"slug": "compilation_error", "message": "bytecode mismatch"}},
                status=200,
            )

            with pytest.raises(VerificationSubmissionError, match="bytecode mismatch"):
                await verifier.verify_contract(ADDRESS, "Counter", payload)

    async def test_empty_body_accepted(self, verifier, payload):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.POST, ADD_URL, body="", status=204)
            rsps.add(responses.POST, VERIFY_URL, json={}, status=200)

            await verifier.verify_contract(ADDRESS, "Counter", payload)

    async def test_invalid_json(self, verifier, payload):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.POST, ADD_URL, body="<html>", status=200)

            with pytest.raises(VerificationSubmissionError, match="invalid JSON"):
                await verifier.verify_contract(ADDRESS, "Counter", payload)

    async def test_network_error(self, verifier, payload):
        with responses.RequestsMock() as rsps:
            rsps.add(
                responses.POST, ADD_URL, body=requests.ConnectionError("connection refused")
            )

            with pytest.raises(VerificationSubmissionError, match="Network error"):
                await verifier.verify_contract(ADDRESS, "Counter", payload)
