class DecodeError(ValueError):
    """The ListUnitFiles reply could not be turned into a registry.
    """


class MalformedReply(DecodeError):
    """The reply does not have the a(ss) shape.
    """


class UnknownUnitType(DecodeError):
    """A unit file has a missing or unrecognized extension.
    """

    def __init__(self, pathname: str) -> None:
        self.pathname = pathname
        super().__init__(f'Unknown unit type: {pathname!r}')


class UnknownUnitState(DecodeError):
    """A unit file state token is empty or unrecognized.
    """

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__(f'Unknown unit state: {token!r}')
