"""AWS Step Functions platform integration.

This module provides the ``stepfunctions`` sink. It automatically
registers with PlatformRegistry if boto3 is available (``pip install
fileset-scanner[aws]``).

Usage:
    >>> from fileset_scanner import PlatformRegistry
    >>>
    >>> if 'stepfunctions' in PlatformRegistry.list_sinks():
    ...     scanner = PlatformRegistry.create_scanner(
    ...         'ome-tiff',
    ...         'stepfunctions',
    ...         sink_options={'state_machine_arn': arn},
    ...     )
"""

# Gated import: Only load if boto3 is installed
try:
    import boto3  # noqa: F401

    from .sink import StepFunctionsSink, execution_name

    # Import registry for auto-registration
    from ...registry import PlatformRegistry

    def _create_stepfunctions_sink(state_machine_arn: str | None = None, **kwargs) -> StepFunctionsSink:
        """Factory function for creating StepFunctionsSink.

        Args:
            state_machine_arn: ARN of the state machine to start
            **kwargs: ``region_name`` is passed through

        Returns:
            Configured StepFunctionsSink instance
        """
        return StepFunctionsSink(state_machine_arn or "", region_name=kwargs.get("region_name"))

    PlatformRegistry.register_sink("stepfunctions", _create_stepfunctions_sink)

    STEPFUNCTIONS_AVAILABLE = True

    __all__ = ["StepFunctionsSink", "execution_name", "STEPFUNCTIONS_AVAILABLE"]

except ImportError:
    # boto3 not installed
    STEPFUNCTIONS_AVAILABLE = False
    StepFunctionsSink = None  # type: ignore[assignment,misc]

    __all__ = ["STEPFUNCTIONS_AVAILABLE"]
