"""Azure Functions entry point — activity functions for DNS-01 challenge records."""

import azure.durable_functions as df
import azure.functions as func

from nicapi_dns.cli import challenge_fqdn
from nicapi_dns.config import load_config
from nicapi_dns.dns import get_dns_provider

app = df.DFApp(http_auth_level=func.AuthLevel.FUNCTION)


def _fqdn(input: dict) -> str:
    return input.get("fqdn") or challenge_fqdn(input["domain"])


# Activity: publish the DNS-01 TXT record
@app.activity_trigger(input_name="input")
def present_dns_challenge(input: dict) -> None:
    config = load_config()
    with get_dns_provider(config) as provider:
        provider.present(input["domain"], _fqdn(input), input["value"])


# Activity: remove the DNS-01 TXT record after validation
@app.activity_trigger(input_name="input")
def cleanup_dns_challenge(input: dict) -> None:
    config = load_config()
    with get_dns_provider(config) as provider:
        provider.cleanup(input["domain"], _fqdn(input), input["value"])
