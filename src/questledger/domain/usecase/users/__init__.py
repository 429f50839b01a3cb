from questledger.domain.usecase.users.get_user_details import GetUserDetails

__all__ = ["GetUserDetails"]
