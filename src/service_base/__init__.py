"""
service_base — single-purpose service objects with typed arguments and explicit results.

    from service_base import Failure, Service, Success, Types, argument

    class PublishPost(Service):
        post_id = argument(Types.Integer, description="Post to publish")
        notify = argument(Types.Bool, default=True)

        def call(self):
            post = self.step(FindPost.run(post_id=self.post_id))
            if post.published:
                return Failure("already_published")
            return Success(post.publish(notify=self.notify))

    result = PublishPost.run(post_id=7)

Argument validation is delegated to pydantic; the outcome is a Result,
either Success(value) or Failure(reason).
"""

from service_base.arguments import MISSING, Argument, argument
from service_base.errors import (
    ArgumentDefinitionError,
    NonExhaustiveMatchError,
    ServiceNotSuccessful,
    UnknownArgumentsError,
)
from service_base.matcher import ResultMatcher, match_result
from service_base.result import Failure, Result, Success
from service_base.service import ArgumentDescription, Service
from service_base.types import Types, type_name

__all__ = [
    "MISSING",
    "Argument",
    "ArgumentDefinitionError",
    "ArgumentDescription",
    "Failure",
    "NonExhaustiveMatchError",
    "Result",
    "ResultMatcher",
    "Service",
    "ServiceNotSuccessful",
    "Success",
    "Types",
    "UnknownArgumentsError",
    "argument",
    "match_result",
    "type_name",
]

__version__ = "0.1.0"
