from questledger.domain.usecase.daily.set_daily_claimed import SetDailyClaimed

__all__ = ["SetDailyClaimed"]
