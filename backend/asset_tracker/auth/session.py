from dataclasses import dataclass

from ..models.Account import Account


@dataclass
class AccountSession:
    """The account currently signed in, passed explicitly to service calls.

    Unset when created, set by a successful login, cleared on logout.
    """

    account: Account | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None

    @property
    def is_admin(self) -> bool:
        return self.account is not None and self.account.is_admin

    def login(self, account: Account) -> None:
        self.account = account

    def logout(self) -> None:
        self.account = None
