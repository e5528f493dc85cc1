from __future__ import annotations

from flask import Flask

from ..common.web import api_errors, current_actor, json_body, json_ok, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    @api_errors("check in")
    def check_in():
        body = json_body()
        record = container.attendance_service.check_in(
            current_actor().user_id,
            latitude=body.get("latitude"),
            longitude=body.get("longitude"),
        )

        message = "Checked in successfully"
        if record.is_half_day:
            message = f"Checked in - marked as HALF DAY ({record.late_by_minutes} min late)"
        elif record.is_late:
            message = f"Checked in - LATE by {record.late_by_minutes} minutes"

        return json_ok(
            {
                "attendance_id": record.attendance_id,
                "work_date": record.work_date.isoformat(),
                "check_in_time": record.check_in_time.isoformat(),
                "location_type": record.location_type.value,
                "geo_fence_id": record.geo_fence_id,
                "is_wfh": record.is_wfh,
                "status": record.status.value,
                "is_late": record.is_late,
                "late_by_minutes": record.late_by_minutes,
                "is_half_day": record.is_half_day,
            },
            message,
        )

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @login_required
    @api_errors("check out")
    def check_out():
        body = json_body()
        result = container.attendance_service.check_out(
            current_actor().user_id,
            latitude=body.get("latitude"),
            longitude=body.get("longitude"),
        )
        result["check_out_time"] = result["check_out_time"].isoformat()
        return json_ok(result, "Checked out successfully")

    @app.route("/api/attendance/location-ping", methods=["POST"], endpoint="api_location_ping")
    @login_required
    @api_errors("process location ping")
    def location_ping():
        body = json_body()
        result = container.attendance_service.location_ping(
            current_actor().user_id,
            latitude=body.get("latitude"),
            longitude=body.get("longitude"),
        )
        return json_ok(
            {
                "inside_fence": result.inside_fence,
                "distance_from_fence": result.distance_from_fence,
                "geo_exit_count": result.geo_exit_count,
            }
        )
