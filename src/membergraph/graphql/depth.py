"""
Query depth guard.

Pure functions over a parsed document: no schema and no execution engine are
involved, so the guard can run before anything touches the store.

Depth counts field selections: ``{ user { posts { title } } }`` has depth 3.
Fragments add no depth of their own, and introspection meta-fields
(``__typename``, ``__schema``, ``__type``) are not counted.
"""

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    InlineFragmentNode,
    Node,
    OperationDefinitionNode,
    SelectionSetNode,
)

DEFAULT_MAX_DEPTH = 5


def _selection_depth(
    selection_set: SelectionSetNode | None,
    fragments: dict[str, FragmentDefinitionNode],
    visited: frozenset[str],
) -> tuple[int, Node | None]:
    """Return the deepest field count below ``selection_set`` and the field reaching it."""
    if selection_set is None:
        return 0, None

    deepest, deepest_node = 0, None
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            if selection.name.value.startswith("__"):
                continue
            child_depth, child_node = _selection_depth(selection.selection_set, fragments, visited)
            depth, node = child_depth + 1, child_node or selection
        elif isinstance(selection, InlineFragmentNode):
            depth, node = _selection_depth(selection.selection_set, fragments, visited)
        elif isinstance(selection, FragmentSpreadNode):
            name = selection.name.value
            fragment = fragments.get(name)
            # Unknown and cyclic spreads are reported by standard validation
            if fragment is None or name in visited:
                continue
            depth, node = _selection_depth(fragment.selection_set, fragments, visited | {name})
        else:
            continue

        if depth > deepest:
            deepest, deepest_node = depth, node

    return deepest, deepest_node


def validate_query_depth(
    document: DocumentNode, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[GraphQLError]:
    """
    Check every operation in ``document`` against ``max_depth``.

    Returns:
        One GraphQLError per operation that nests deeper than allowed;
        an empty list when the document is acceptable.
    """
    fragments = {
        definition.name.value: definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }

    errors = []
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        depth, node = _selection_depth(definition.selection_set, fragments, frozenset())
        if depth > max_depth:
            name = definition.name.value if definition.name else "anonymous"
            errors.append(
                GraphQLError(
                    f"'{name}' exceeds maximum operation depth of {max_depth}",
                    nodes=[node] if node is not None else None,
                    extensions={"code": "QUERY_TOO_DEEP", "depth": depth},
                )
            )
    return errors
