"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Wallet / wager placement
  3xxx: Bet slip / odds
  6xxx: Upstream fantasy data
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Wallet ---

class InsufficientFundsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient funds: stake {required} cents, balance {available} cents",
            422,
        )


class WalletNotFoundError(AppError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(2002, f"Wallet not found for participant {participant_id}", 404)


class InvalidStakeError(AppError):
    def __init__(self, stake: int) -> None:
        super().__init__(2003, f"Stake must be positive, got {stake} cents", 422)


class EmptySlipError(AppError):
    def __init__(self) -> None:
        super().__init__(2004, "Bet slip is empty", 422)


class PlacementInProgressError(AppError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(
            2005, f"A wager placement is already in progress for {participant_id}", 409
        )


class NotLeagueMemberError(AppError):
    def __init__(self, username: str) -> None:
        super().__init__(2006, f"User {username} is not a member of this league", 403)


# --- 3xxx: Slip / odds ---

class SelectionNotOfferedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3001, f"Selection not offered: {detail}", 422)


class SlipLegNotFoundError(AppError):
    def __init__(self, index: int) -> None:
        super().__init__(3002, f"No leg at slip position {index}", 404)


class WeekNotAvailableError(AppError):
    def __init__(self) -> None:
        super().__init__(3003, "Current league week is not available", 503)


class StaleSlipError(AppError):
    def __init__(self, slip_week: int | None, current_week: int | None) -> None:
        super().__init__(
            3004,
            f"Bet slip was priced for week {slip_week} but the current week is {current_week}",
            409,
        )


# --- 6xxx: Upstream data ---

class DataUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6001, f"League data unavailable: {detail}", 503)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class AdminForbiddenError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Admin secret missing or invalid", 403)
