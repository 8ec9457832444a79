"""AWS Step Functions sink.

This module provides a Sink that starts one state machine execution per
fileset, with the submission document as the execution input.
"""

import hashlib
import json
import re
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...core.errors import SubmissionError
from ...sinks.base import Sink
from ...submission import FilesetDescriptor

# Execution names: 1-80 characters from [A-Za-z0-9_-]
MAX_EXECUTION_NAME = 80
_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def execution_name(descriptor: FilesetDescriptor) -> str:
    """Derive a deterministic execution name for a fileset.

    The same fileset of the same import always maps to the same name, so
    Step Functions deduplicates a repeated start of an identical execution.

    Args:
        descriptor: The fileset being submitted

    Returns:
        Execution name of at most 80 characters
    """
    digest = hashlib.sha256(
        json.dumps(descriptor.to_document(), sort_keys=True).encode("utf-8")
    ).hexdigest()[:32]
    prefix = _INVALID_NAME_CHARS.sub("_", descriptor.import_id)
    prefix = prefix[: MAX_EXECUTION_NAME - len(digest) - 1]
    return f"{prefix}-{digest}" if prefix else digest


class StepFunctionsSink(Sink):
    """Sink that starts AWS Step Functions executions.

    Example:
        >>> sink = StepFunctionsSink('arn:aws:states:us-east-1:123:stateMachine:ingest')
        >>> sink.submit(descriptor)
        'arn:aws:states:us-east-1:123:execution:ingest:1234-9f2c...'
    """

    name = "stepfunctions"

    def __init__(self, state_machine_arn: str, client: Any = None, region_name: str | None = None):
        """Initialize the sink.

        Args:
            state_machine_arn: ARN of the state machine to start
            client: Pre-built boto3 ``stepfunctions`` client
            region_name: AWS region for a newly created client

        Raises:
            ValueError: If no state machine ARN is given
        """
        if not state_machine_arn:
            raise ValueError("The stepfunctions sink needs a state machine ARN")

        self.state_machine_arn = state_machine_arn
        if client is None:
            try:
                client = boto3.client("stepfunctions", region_name=region_name)
            except BotoCoreError as e:
                raise ValueError(f"Cannot create Step Functions client: {e}") from e
        self._client = client

    def submit(self, descriptor: FilesetDescriptor) -> str:
        try:
            response = self._client.start_execution(
                stateMachineArn=self.state_machine_arn,
                name=execution_name(descriptor),
                input=json.dumps(descriptor.to_document()),
            )
        except (ClientError, BotoCoreError) as e:
            raise SubmissionError(
                f"Cannot start execution for fileset {descriptor.entry_point}: {e}"
            ) from e

        return str(response["executionArn"])
