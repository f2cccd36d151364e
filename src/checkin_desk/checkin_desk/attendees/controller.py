from __future__ import annotations

import io
import logging
from pathlib import Path

from flask import Flask, jsonify, request, send_file, send_from_directory

from ..common.datetime_utils import format_clock
from ..container import Container
from ..core.constants import EXPORT_FILENAME, MATCH_TYPE_LABELS, MSG_INCOMPLETE
from ..core.exceptions import RosterFormatError, StoreError
from ..roster.importer import read_roster_file
from .model import CheckInRequest
from .results import AlreadyCheckedIn, CheckInSuccess, InvalidCheckIn, RequiresConfirmation

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _parse_checkin_body(data: dict) -> CheckInRequest:
    def _text(key: str):
        value = data.get(key)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    return CheckInRequest(
        name=_text("name"),
        phone=_text("phone"),
        confirm_new=bool(data.get("confirmNew")),
        use_existing_phone=_text("useExistingPhone") or None,
    )


def _result_payload(result):
    """Map a check-in result to (json body, status code)."""

    if isinstance(result, CheckInSuccess):
        return {"success": True, "user": result.record.to_dict(), "isNew": result.is_new}, 200

    if isinstance(result, AlreadyCheckedIn):
        if result.check_in_time and not result.claimed:
            message = f"您好 {result.name}，您于 {format_clock(result.check_in_time)} 已经签到过了，请勿重复扫码。"
        else:
            message = f"用户 {result.name} 已经签到过了，无需重复！"
        return {
            "success": False,
            "error": message,
            "name": result.name,
            "checkInTime": result.check_in_time,
        }, 200

    if isinstance(result, RequiresConfirmation):
        return {
            "success": False,
            "requiresConfirmation": True,
            "candidates": [
                {
                    "name": c.name,
                    "phone": c.phone,
                    "maskedPhone": c.masked_phone,
                    "matchType": c.match_type.value,
                    "matchLabel": MATCH_TYPE_LABELS[c.match_type.value],
                }
                for c in result.candidates
            ],
        }, 200

    if isinstance(result, InvalidCheckIn):
        logger.info("Rejected check-in: %s", result.reason)
        return {"success": False, "error": MSG_INCOMPLETE, "reason": result.reason}, 400

    raise TypeError(f"Unknown check-in result: {result!r}")


def register(app: Flask, container: Container) -> None:
    public_dir = Path(app.config.get("PUBLIC_DIR") or "public")

    @app.errorhandler(StoreError)
    def handle_store_error(e: StoreError):
        logger.error("Store failure on %s %s", request.method, request.path, exc_info=e)
        return jsonify({"success": False, "error": "数据存储失败，请稍后重试"}), 500

    @app.route("/", endpoint="index")
    def index():
        return send_from_directory(public_dir, "index.html")

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        result = container.checkin_service.check_in(_parse_checkin_body(data))
        body, status = _result_payload(result)
        return jsonify(body), status

    @app.route("/api/list", methods=["GET"], endpoint="api_list")
    def api_list():
        records = container.checkin_service.list_records()
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/stats", methods=["GET"], endpoint="api_stats")
    def api_stats():
        return jsonify(container.stats_service.get_stats().to_dict())

    @app.route("/api/import", methods=["POST"], endpoint="api_import")
    def api_import():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return jsonify({"error": "请选择文件"}), 400

        try:
            rows = read_roster_file(io.BytesIO(upload.read()), upload.filename)
        except RosterFormatError as e:
            logger.warning("Roster upload %s rejected: %s", upload.filename, e)
            return jsonify({"error": str(e)}), 400

        count = container.roster_service.import_roster(rows)
        return jsonify({"success": True, "count": count})

    @app.route("/api/export", methods=["GET"], endpoint="api_export")
    def api_export():
        payload = container.export_service.export_xlsx()
        return send_file(
            io.BytesIO(payload),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=EXPORT_FILENAME,
        )

    @app.route("/api/tunnel", methods=["GET"], endpoint="api_tunnel")
    def api_tunnel():
        tunnel = container.tunnel_service
        if tunnel is None:
            return jsonify({"url": "", "qr": ""})
        return jsonify(tunnel.status().to_dict())
