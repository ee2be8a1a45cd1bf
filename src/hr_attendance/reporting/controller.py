from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/monthly-report/<month>", methods=["GET"], endpoint="api_monthly_report")
    def api_monthly_report(month: str):
        try:
            report = container.report_service.build_monthly_report(month)
            return jsonify(report.to_dict()), 200
        except ValidationError as e:
            return jsonify({"msg": str(e)}), 400
        except Exception:
            logger.exception("Monthly report failed for %s", month)
            return jsonify({"msg": "Server error while building the monthly report"}), 500

    @app.route(
        "/api/attendance/employee/<int:employee_id>/<month>", methods=["GET"], endpoint="api_employee_attendance"
    )
    def api_employee_attendance(employee_id: int, month: str):
        try:
            detail = container.report_service.build_employee_detail(employee_id, month)
            return jsonify(detail.to_dict()), 200
        except ValidationError as e:
            return jsonify({"msg": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"msg": str(e)}), 404
        except Exception:
            logger.exception("Employee attendance failed for %s %s", employee_id, month)
            return jsonify({"msg": "Server error while loading employee attendance"}), 500

    @app.route("/api/attendance/months", methods=["GET"], endpoint="api_attendance_months")
    def api_attendance_months():
        try:
            return jsonify({"months": list(container.report_service.available_months())}), 200
        except Exception:
            logger.exception("Listing attendance months failed")
            return jsonify({"msg": "Server error while listing months"}), 500
