# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request dispatch: build, sign and send templates."""

from .builder import build_request, is_form_encoded, normalize_host
from .engine import DispatchEngine, ResponseCallback

__all__ = ["DispatchEngine", "ResponseCallback", "build_request", "is_form_encoded", "normalize_host"]
