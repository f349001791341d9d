"""
paygate: client for the remote payment gateway.

Forwards payment operations to the gateway and normalizes every answer into
one NormalizedResult (success + canonical status 1/0).
"""

from paygate.integrations.clients.real_http.gateway import PaymentGatewayClient
from paygate.integrations.contracts.results import NormalizedResult

__all__ = ["NormalizedResult", "PaymentGatewayClient"]
