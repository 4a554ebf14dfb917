"""GraphQL documents for the products connection."""

PRODUCTS_QUERY = """
query GetProducts($cursor: String, $pageSize: Int!) {
  products(first: $pageSize, after: $cursor) {
    pageInfo {
      hasNextPage
      hasPreviousPage
      endCursor
      startCursor
    }
    nodes {
      id
      title
      onlineStoreUrl
    }
  }
}
"""

PRODUCTS_BEFORE_QUERY = """
query GetProductsBefore($cursor: String, $pageSize: Int!) {
  products(last: $pageSize, before: $cursor) {
    pageInfo {
      hasNextPage
      hasPreviousPage
      endCursor
      startCursor
    }
    nodes {
      id
      title
      onlineStoreUrl
    }
  }
}
"""

# Cursor walk for page jumps: edge cursors only, so each hop stays cheap
# and can skip up to the Admin API maximum of items at once
PRODUCTS_CURSORS_QUERY = """
query GetProductCursors($cursor: String, $pageSize: Int!) {
  products(first: $pageSize, after: $cursor) {
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      cursor
    }
  }
}
"""
