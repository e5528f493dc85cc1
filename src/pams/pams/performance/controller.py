from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import current_period
from ..common.web import api_errors, current_actor, json_ok, login_required
from ..container import Container
from .model import CompositeResult, PerformanceDetail


def _result_json(result: CompositeResult) -> dict:
    return {
        "period": result.period,
        "total_score": result.total_score,
        "bonus_percentage": result.bonus_percentage,
        "tier": result.tier,
        "tier_color": result.tier_color,
        "scores": result.breakdown(),
    }


def _detail_json(detail: PerformanceDetail) -> dict:
    data = {
        "user_id": detail.user_id,
        "user_name": detail.user_name,
        "employee_code": detail.employee_code,
    }
    data.update(_result_json(detail.result))
    data["history"] = [
        {
            "period": h.period,
            "total_score": h.total_score,
            "bonus_percentage": h.bonus_percentage,
            "tier": h.tier,
            "is_finalized": h.is_finalized,
        }
        for h in detail.history
    ]
    return data


def register(app: Flask, container: Container) -> None:
    def _detail(user_id: int, period: str):
        actor = current_actor()
        detail = container.performance_service.user_detail(
            current_role=actor.role,
            actor_id=actor.user_id,
            company_id=actor.company_id,
            user_id=user_id,
            period=period,
        )
        return json_ok(_detail_json(detail))

    @app.route("/api/performance", methods=["GET"], endpoint="api_performance")
    @login_required
    @api_errors("fetch performance data")
    def performance():
        period = request.args.get("period") or current_period()
        user_id = request.args.get("user_id", type=int)
        if user_id:
            return _detail(user_id, period)

        actor = current_actor()
        rankings = container.performance_service.rankings(
            current_role=actor.role, company_id=actor.company_id, period=period
        )
        data = []
        for entry in rankings:
            row = {
                "rank": entry.rank,
                "user_id": entry.user_id,
                "user_name": entry.user_name,
                "employee_code": entry.employee_code,
            }
            row.update(_result_json(entry.result))
            data.append(row)
        return json_ok(data)

    @app.route("/api/performance", methods=["POST"], endpoint="api_calculate_performance")
    @login_required
    @api_errors("calculate performance scores")
    def calculate():
        actor = current_actor()
        summary = container.performance_service.calculate_company(
            current_role=actor.role,
            company_id=actor.company_id,
            period=request.args.get("period") or "",
        )
        return json_ok(summary)

    @app.route("/api/performance/<int:user_id>", methods=["GET"], endpoint="api_user_performance")
    @login_required
    @api_errors("fetch user performance")
    def user_performance(user_id: int):
        return _detail(user_id, request.args.get("period") or current_period())
