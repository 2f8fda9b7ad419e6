# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request


def client_ip(req: Request, *, trust_proxy: bool = False) -> str:
    """Network address used to key per-client state such as rate-limit windows."""
    if trust_proxy:
        forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
        if forwarded:
            return forwarded
    return req.remote_addr or "unknown"


def bearer_token(req: Request) -> str | None:
    """Token from ``Authorization: Bearer <token>``; ``None`` when the header is absent.

    Raises ``ValueError`` when the header is present but not a two-part Bearer value.
    """
    header = req.headers.get("Authorization")
    if header is None:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise ValueError("invalid authorization format")
    return parts[1]
