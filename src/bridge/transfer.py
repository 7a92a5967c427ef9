"""BXML that moves an answered call into a WebRTC session."""

from __future__ import annotations

import base64
import re
from xml.sax.saxutils import quoteattr, escape

DEFAULT_SIP_URI = "sip:sipx.webrtc.bandwidth.com:5060"

_CALL_ID_RE = re.compile(r"^c-(?P<hex>[0-9a-fA-F]+(?:-[0-9a-fA-F]+)*)$")


def encode_call_id(call_id: str) -> str:
    """Base64 form of a call id as carried in the SIP UUI header.

    Voice API ids look like ``c-<hex>-<hex>...``; those are packed as raw
    bytes. Anything else is encoded as UTF-8.
    """

    match = _CALL_ID_RE.match(call_id)
    if match:
        digits = match.group("hex").replace("-", "")
        if len(digits) % 2 == 0:
            return base64.b64encode(bytes.fromhex(digits)).decode("ascii")
    return base64.b64encode(call_id.encode("utf-8")).decode("ascii")


def generate_transfer_bxml(join_token: str, call_id: str, sip_uri: str = DEFAULT_SIP_URI) -> str:
    uui = f"{encode_call_id(call_id)};encoding=base64,{join_token};encoding=jwt"
    return (
        "<?xml version=\"1.0\" encoding=\"UTF-8\"?>"
        "<Response>"
        f"<Transfer tag={quoteattr(call_id)}>"
        f"<SipUri uui={quoteattr(uui)}>{escape(sip_uri)}</SipUri>"
        "</Transfer>"
        "</Response>"
    )
