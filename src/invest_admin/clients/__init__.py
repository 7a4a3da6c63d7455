from .dashboard_client import DashboardClient
from .investment_client import InvestmentClient
from .mlm_client import MlmClient
from .users_client import UsersClient

__all__ = ["DashboardClient", "InvestmentClient", "MlmClient", "UsersClient"]
