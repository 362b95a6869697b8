class CardRenderError(RuntimeError):
    """Any failure that aborts a card render."""


class ImageLoadError(CardRenderError):
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"failed to load image from {source}: {reason}")


class EncodeError(CardRenderError):
    pass


class FontLoadError(CardRenderError):
    pass
