from typing import Any, Dict

from fastapi import Request
from strawberry.fastapi import GraphQLRouter

from hospital_dashboard.schema import schema


def get_context(request: Request) -> Dict[str, Any]:
    """Per-request GraphQL context.

    The staff identifier rides along as ``X-Staff-Id`` or ``?staffId=``; it is
    only consulted when the API itself enforces access levels.
    """
    staff_id = request.headers.get("X-Staff-Id") or request.query_params.get("staffId")
    return {
        "database": request.app.state.database,
        "settings": request.app.state.settings,
        "staff_id": staff_id,
    }


def build_router(graphiql: bool = True) -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql else None,
    )
