"""Tests for lw_common.errors and lw_common.response."""

from src.lw_common.errors import (
    AdminForbiddenError,
    AppError,
    DataUnavailableError,
    EmptySlipError,
    InsufficientFundsError,
    InvalidStakeError,
    NotLeagueMemberError,
    PlacementInProgressError,
    SelectionNotOfferedError,
    SlipLegNotFoundError,
    StaleSlipError,
    WalletNotFoundError,
    WeekNotAvailableError,
)
from src.lw_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_insufficient_funds(self) -> None:
        err = InsufficientFundsError(required=6500, available=3000)
        assert err.code == 2001
        assert err.http_status == 422
        assert "6500" in err.message
        assert "3000" in err.message

    def test_wallet_not_found(self) -> None:
        err = WalletNotFoundError("u-1")
        assert (err.code, err.http_status) == (2002, 404)

    def test_invalid_stake(self) -> None:
        assert InvalidStakeError(0).code == 2003

    def test_empty_slip(self) -> None:
        assert EmptySlipError().code == 2004

    def test_placement_in_progress_is_conflict(self) -> None:
        err = PlacementInProgressError("u-1")
        assert (err.code, err.http_status) == (2005, 409)

    def test_not_league_member_is_forbidden(self) -> None:
        err = NotLeagueMemberError("stranger")
        assert (err.code, err.http_status) == (2006, 403)
        assert "stranger" in err.message

    def test_slip_errors(self) -> None:
        assert SelectionNotOfferedError("x").code == 3001
        assert SlipLegNotFoundError(3).http_status == 404
        assert WeekNotAvailableError().http_status == 503

    def test_stale_slip_is_conflict(self) -> None:
        err = StaleSlipError(5, 6)
        assert (err.code, err.http_status) == (3004, 409)
        assert "week 5" in err.message

    def test_data_unavailable(self) -> None:
        err = DataUnavailableError("GET /state failed")
        assert (err.code, err.http_status) == (6001, 503)
        assert "GET /state failed" in err.message

    def test_admin_forbidden(self) -> None:
        assert AdminForbiddenError().http_status == 403


class TestApiResponse:
    def test_success_envelope(self) -> None:
        resp = success_response({"a": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"a": 1}
        assert resp.request_id.startswith("req_")

    def test_error_envelope(self) -> None:
        resp = error_response(2001, "nope")
        assert isinstance(resp, ApiResponse)
        assert resp.code == 2001
        assert resp.data is None
