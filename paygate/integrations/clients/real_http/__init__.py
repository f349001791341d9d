"""
Real HTTP integration clients.

These clients communicate with the remote payment gateway via httpx:
- transport.py: one request per call, raw status + body or a transport failure
- gateway.py: PaymentGatewayClient, the action dispatcher

Important:
- Keep these as the ONLY place where gateway HTTP calls are made.
"""
