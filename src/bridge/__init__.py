"""Browser to PSTN bridging core.

The flow sequenced by :class:`bridge.orchestrator.BridgeOrchestrator` is:
ensure a media session -> admit a participant -> (optionally) dial out ->
on answer, transfer the call into the session -> on request, end the call.

The dial request and the answer webhook share nothing but the call id, looked
up through :class:`bridge.identity_store.IdentityStore`.
"""
