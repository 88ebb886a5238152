"""Repository URL construction.

URLs have the form ``server/root/repository[/path]``. Parts are joined
verbatim; no URL encoding is applied.
"""


def normalize_base(server: str) -> str:
    """Strip trailing slashes from a server address."""
    return server.rstrip("/")


def normalize_rel_path(path: str) -> str:
    """Strip leading slashes from a relative path."""
    return path.lstrip("/")


def url_root(web: bool, svn_root: str = "svn", web_root: str = "viewvc") -> str:
    """Select the web-viewer root or the source-control root."""
    return web_root if web else svn_root


def build_url(base: str, root: str, repo: str, rel_path: str = "") -> str:
    """Build the URL of a repository.

    Args:
        base: Server address, e.g. ``http://host:3690``.
        root: Root segment, e.g. ``svn``.
        repo: Repository identifier.
        rel_path: Optional path inside the repository.

    Example:
        ```python
        build_url("http://host:90", "svn", "proj/a", "trunk")
        # "http://host:90/svn/proj/a/trunk"
        ```
    """
    target = repo
    rel_path = rel_path.strip("/")
    if rel_path:
        target = f"{repo}/{rel_path}"
    return f"{normalize_base(base)}/{root}/{target}"
