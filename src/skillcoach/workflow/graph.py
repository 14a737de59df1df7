"""Graph workflow definition."""

from pydantic_graph import Graph

from skillcoach.core.log import logger
from skillcoach.workflow.state import SessionState


def create_session_graph():
    """Create the coaching session graph.

    StartAttempt -> RunSteps -> FinishAttempt

    Returns:
        Graph with SessionState as state_type
    """
    logger.debug("Building session graph")

    # Imported here so the graph sees every node's return annotations
    from skillcoach.workflow.nodes.finish_attempt import FinishAttempt
    from skillcoach.workflow.nodes.run_steps import RunSteps
    from skillcoach.workflow.nodes.start_attempt import StartAttempt

    return Graph(
        nodes=(StartAttempt, RunSteps, FinishAttempt),
        state_type=SessionState,
    )
