from .config import GIT_INDEX_TITLE
from .probe import probe


async def check_git_directory(client, url, timeout):
    result = await probe(client, url, timeout)
    if not result.ok:
        print(f"[ERROR] Could not connect to {url}: {result.error}")
        return False

    if result.status_code == 200:
        print(f"[OK] .git directory found: {url}")
        return True

    print(f"[FAIL] No .git directory at: {url} (Status: {result.status_code})")
    return False


async def has_git_index_title(client, url, timeout):
    result = await probe(client, url, timeout, read_body=True)
    if not result.ok:
        print(f"[ERROR] Could not fetch {url}: {result.error}")
        return False

    if GIT_INDEX_TITLE.encode() in result.body:
        print(f"[MATCH] Title 'Index of /.git' found at {url}")
        return True

    print(f"[NO MATCH] Title 'Index of /.git' not found at {url}")
    return False


async def verify_domain(client, domain, timeout):
    """Existence check, then listing-title check. True only if both pass."""
    url = f"{domain}/.git/"
    if not await check_git_directory(client, url, timeout):
        return False
    return await has_git_index_title(client, url, timeout)
