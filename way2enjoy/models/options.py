from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

ResizeMethod = Literal["cover", "fit", "scale"]


class ResizeOptions(BaseModel):
    method: ResizeMethod
    width: int | None = None
    height: int | None = None


class StoreTarget(BaseModel):
    """Amazon S3 destination the service should persist the result to.

    Values are passed through to the API untouched.
    """

    service: str = "s3"
    aws_access_key_id: str
    aws_secret_access_key: str
    region: str
    path: str


class TransformOptions(BaseModel):
    resize: ResizeOptions | None = None
    store: StoreTarget | None = None

    @classmethod
    def build(
        cls,
        method: ResizeMethod | None = None,
        width: int | None = None,
        height: int | None = None,
        store: StoreTarget | None = None,
    ) -> "TransformOptions":
        """Build options for one request.

        The resize block is only attached when a method and at least one
        dimension are given.
        """

        resize = None
        if method is not None and (width is not None or height is not None):
            resize = ResizeOptions(method=method, width=width, height=height)
        return cls(resize=resize, store=store)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
