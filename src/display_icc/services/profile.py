"""ProfileService — display/profile operations packaged as ServiceResult.

Every ProfileError is folded into ``ServiceResult.error``; anything else
propagates. Problems that do not stop the operation (an unreadable header
during ``display_info``) become warnings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from display_icc.domain.errors import ProfileError, ProfileIOError, ProfileNotAvailable
from display_icc.domain.icc import IccHeader
from display_icc.domain.models import Display
from display_icc.services.provider import ProfileProvider
from display_icc.services.result import ServiceError, ServiceResult
from display_icc.services.telemetry import traced

logger = logging.getLogger(__name__)


def error_result(op: str, exc: ProfileError) -> ServiceResult:
    """Convert a ProfileError into a failed ServiceResult."""
    detail: dict[str, Any] = {"kind": type(exc).__name__}
    if exc.detail:
        detail["detail"] = exc.detail
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=exc.code, message=str(exc), detail=detail),
    )


class ProfileService:
    """Display profile operations for the CLI and other front ends."""

    def __init__(self, provider: ProfileProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> ProfileProvider:
        return self._provider

    def _select(self, display_id: str | None) -> Display:
        if display_id is None:
            return self._provider.get_primary_display()
        return self._provider.find_display(display_id)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @traced
    def display_info(self, display_id: str | None = None, *, include_header: bool = False) -> ServiceResult:
        """Profile of one display (primary by default), optionally with its ICC header."""
        op = "display_info"
        warnings: list[str] = []
        try:
            display = self._select(display_id)
            resolution = self._provider.resolve(display)
        except ProfileError as exc:
            return error_result(op, exc)

        data: dict[str, Any] = {
            "display": display.model_dump(),
            "profile": resolution.record.to_info().to_dict(),
        }

        if include_header:
            try:
                raw = self._provider.read_resolution(resolution)
                data["icc_size"] = len(raw)
                data["header"] = IccHeader.parse(raw).to_dict()
            except ProfileError as exc:
                logger.debug("Header unavailable for %s: %s", display.id, exc)
                warnings.append(f"ICC header unavailable: {exc}")

        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={"backend": resolution.backend.name},
        )

    @traced
    def list_displays(self) -> ServiceResult:
        """Every display with its profile, or the reason it has none."""
        op = "list_displays"
        try:
            displays = self._provider.get_displays()
        except ProfileError as exc:
            return error_result(op, exc)

        items: list[dict[str, Any]] = []
        for display in displays:
            item: dict[str, Any] = {**display.model_dump(), "profile": None, "error": None}
            try:
                item["profile"] = self._provider.get_profile(display).to_dict()
            except ProfileNotAvailable:
                pass
            except ProfileError as exc:
                item["error"] = str(exc)
            items.append(item)

        return ServiceResult(
            ok=True,
            op=op,
            data={"displays": items, "count": len(items)},
        )

    @traced
    def export_profile(self, output: Path, display_id: str | None = None) -> ServiceResult:
        """Write the raw profile bytes of a display to *output*."""
        op = "export_profile"
        try:
            display = self._select(display_id)
            resolution = self._provider.resolve(display)
            raw = self._provider.read_resolution(resolution)
            try:
                output.parent.mkdir(parents=True, exist_ok=True)
                output.write_bytes(raw)
            except OSError as exc:
                raise ProfileIOError.from_os_error(exc) from exc
        except ProfileError as exc:
            return error_result(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "display": display.model_dump(),
                "profile": resolution.record.name,
                "path": str(output),
                "bytes": len(raw),
            },
            meta={"backend": resolution.backend.name},
        )

    @traced
    def icc_header(
        self,
        *,
        display_id: str | None = None,
        file: Path | None = None,
        validate: bool = False,
    ) -> ServiceResult:
        """Parsed header of a local profile file or of a display's profile."""
        op = "icc_header"
        try:
            if file is not None:
                source = str(file)
                try:
                    raw = file.read_bytes()
                except OSError as exc:
                    raise ProfileIOError.from_os_error(exc) from exc
            else:
                display = self._select(display_id)
                raw = self._provider.get_profile_data(display)
                source = display.id
            header = IccHeader.parse(raw)
            if validate:
                header.validate()
        except ProfileError as exc:
            return error_result(op, exc)

        data: dict[str, Any] = {"source": source, "size": len(raw), "header": header.to_dict()}
        if validate:
            data["valid"] = True
        return ServiceResult(ok=True, op=op, data=data)

