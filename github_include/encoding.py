# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Text-encoding repair for fetched documents.

GitHub returns README/wiki bytes exactly as committed, so anything can show up:
Latin-1 files, truncated multibyte sequences, a UTF-8 BOM written by an editor.
`normalize()` always returns valid, BOM-free text and never raises.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

logger = logging.getLogger(__name__)

BOM = "\ufeff"


def normalize(raw: Optional[Union[bytes, bytearray, str]], *, normalize_newlines: bool = False) -> str:
    """Decode `raw` as UTF-8, repairing invalid sequences with U+FFFD.

    Args:
        raw: payload bytes (str is accepted and only gets the BOM/newline treatment)
        normalize_newlines: convert CRLF / CR line endings to LF

    Returns:
        Valid text, possibly empty, without a leading BOM.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        # Lone surrogates can't be encoded as UTF-8; round-trip to replace them.
        text = raw.encode("utf-8", errors="replace").decode("utf-8")
    else:
        data = bytes(raw)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.debug("Repairing invalid UTF-8 payload (%d bytes): %s", len(data), e)
            text = data.decode("utf-8", errors="replace")

    if text.startswith(BOM):
        text = text[len(BOM):]
    if normalize_newlines:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text
