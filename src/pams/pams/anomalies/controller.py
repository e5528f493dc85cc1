from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import api_errors, current_actor, json_ok, login_required
from ..container import Container
from .model import AnomalyReport


def _report_json(report: AnomalyReport) -> dict:
    return {
        "report_id": report.report_id,
        "report_date": report.report_date.isoformat(),
        "summary": report.summary,
        "anomalies": [item.to_dict() for item in report.items],
        "failed_checks": list(report.failed_checks),
        "sent_to": list(report.sent_to),
        "sent_at": report.sent_at.isoformat() if report.sent_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/anomalies/detect", methods=["POST"], endpoint="api_detect_anomalies")
    @login_required
    @api_errors("run anomaly detection")
    def detect():
        actor = current_actor()
        report = container.anomaly_service.generate_daily_report(
            current_role=actor.role, company_id=actor.company_id
        )
        return json_ok(_report_json(report), "Anomaly detection completed")

    @app.route("/api/anomalies/reports", methods=["GET"], endpoint="api_anomaly_reports")
    @login_required
    @api_errors("fetch anomaly reports")
    def reports():
        actor = current_actor()
        args = request.args
        listing = container.anomaly_service.list_reports(
            current_role=actor.role,
            company_id=actor.company_id,
            date_from=parse_iso_date(args["from"]) if args.get("from") else None,
            date_to=parse_iso_date(args["to"]) if args.get("to") else None,
            page=args.get("page", 1, type=int),
            limit=args.get("limit", 20, type=int),
        )
        listing["records"] = [_report_json(r) for r in listing["records"]]
        return json_ok(listing)
