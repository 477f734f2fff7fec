from betledger.models.bankroll_transaction import BankrollTransaction, TransactionType
from betledger.models.bet import Bet, BetStatus

__all__ = ["Bet", "BetStatus", "BankrollTransaction", "TransactionType"]
