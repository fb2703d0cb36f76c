"""Request-scoped helpers shared by the routers."""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..db.repositories import NutritionPlanRepository, UserRepository, WorkoutRepository
from ..generation.provider import PlanProvider
from ..services.planner import NutritionPlanner, WorkoutPlanner


def get_templates(request: Request) -> Jinja2Templates:
    """Get templates from app state."""
    return request.app.state.templates


def get_provider(request: Request) -> PlanProvider:
    """The provider created at startup."""
    return request.app.state.provider


def user_repo(request: Request) -> UserRepository:
    return UserRepository(request.app.state.db_path)


def workout_repo(request: Request) -> WorkoutRepository:
    return WorkoutRepository(request.app.state.db_path)


def nutrition_repo(request: Request) -> NutritionPlanRepository:
    return NutritionPlanRepository(request.app.state.db_path)


def workout_planner(request: Request) -> WorkoutPlanner:
    return WorkoutPlanner(get_provider(request), workout_repo(request))


def nutrition_planner(request: Request) -> NutritionPlanner:
    return NutritionPlanner(get_provider(request), nutrition_repo(request))


def notice_context(request: Request) -> dict:
    """Template variables for a notice passed on the query string."""
    return {
        "notice": request.query_params.get("notice"),
        "notice_level": request.query_params.get("level", "info"),
        "notice_title": request.query_params.get("title"),
    }
