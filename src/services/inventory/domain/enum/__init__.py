from .claim_result import ClaimResult as ClaimResult
