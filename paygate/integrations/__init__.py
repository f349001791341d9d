"""
Integrations layer.
This package contains all code used to communicate with the remote payment gateway:
- contracts: request/response structures (no I/O)
- registry: the fixed action -> endpoint/encoding/rule table
- policy: response decoding and status normalization
- clients/real_http: the HTTP transport and the PaymentGatewayClient dispatcher
- uploads: multipart qualification uploads

Key rule:
- Callers only ever see NormalizedResult; upstream status codes stay in here.
"""
