class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class FareNotFoundException(ResourceNotFoundException):
    """路線または時刻表が存在せず、運賃を確定できない場合"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class SeatUnavailableException(BusinessRuleViolationException):
    """選択された座席がすでに埋まっている場合"""

    pass


class PaymentInProgressException(BusinessRuleViolationException):
    """決済がプロバイダ側で処理中のため、まだ確定も取消もできない場合"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass


class TransactionConflictException(OptimisticLockException):
    """トランザクション内のいずれかの条件が満たされず、何も書き込まれなかった場合"""

    pass


class PaymentProviderException(DomainException):
    """決済プロバイダとの通信失敗、またはプロバイダ側での拒否"""

    pass


class SignatureVerificationException(DomainException):
    """Webhook の署名検証に失敗した場合"""

    pass


class PersistenceException(DomainException):
    """ストレージが利用できない場合（再試行可能なインフラエラー）"""

    pass
