from .loyalty_models import LoyaltyAccount, PointsTransaction, PointsTransactionType

__all__ = ["LoyaltyAccount", "PointsTransaction", "PointsTransactionType"]
