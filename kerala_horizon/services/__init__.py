"""Services for the Kerala Horizon API."""
from .llm_client import LLMClient
from .auth_service import AuthService
from .document_vault import DocumentVault
from .green_score import GreenScoreService
from .trip_planner import TripPlannerService
from .wallet import WalletService

__all__ = [
    "LLMClient",
    "AuthService",
    "DocumentVault",
    "GreenScoreService",
    "TripPlannerService",
    "WalletService",
]
