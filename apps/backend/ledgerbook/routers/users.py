"""Users router: registration, credentials and chart registry."""

from fastapi import APIRouter

from ledgerbook.api.users import handlers
from ledgerbook.schemas import ChartOut, ForgotPasswordOut, UserOut

router = APIRouter(prefix="/users", tags=["users"])

router.add_api_route(
    "",
    handlers.register_user,
    methods=["POST"],
    response_model=UserOut,
    status_code=201,
)

router.add_api_route(
    "/login",
    handlers.login,
    methods=["POST"],
    response_model=UserOut,
)

router.add_api_route(
    "/me",
    handlers.get_me,
    methods=["GET"],
    response_model=UserOut,
)

router.add_api_route(
    "/me/password",
    handlers.change_password,
    methods=["PATCH"],
    response_model=UserOut,
)

router.add_api_route(
    "/me/chart/{classification}",
    handlers.replace_chart,
    methods=["PUT"],
    response_model=ChartOut,
)

router.add_api_route(
    "/forgot-password",
    handlers.forgot_password,
    methods=["POST"],
    response_model=ForgotPasswordOut,
)

router.add_api_route(
    "/reset-password",
    handlers.reset_password,
    methods=["POST"],
    response_model=UserOut,
)
