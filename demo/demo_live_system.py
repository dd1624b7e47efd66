"""
End-to-end demonstration of the wrapped service.

This script demonstrates:
1. The service is healthy
2. A first lookup computes the bundle
3. Concurrent lookups for the same user share one computation
4. A repeated lookup is served from cache
"""

import asyncio
import sys
import time

import httpx

# Configuration
API_BASE_URL = "http://localhost:8000"


class Colors:
    """Terminal colors for pretty output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    END = '\033[0m'
    BOLD = '\033[1m'


def print_header(text: str):
    """Print colored header."""
    print(f"\n{Colors.HEADER}{Colors.BOLD}{'='*70}{Colors.END}")
    print(f"{Colors.HEADER}{Colors.BOLD}{text.center(70)}{Colors.END}")
    print(f"{Colors.HEADER}{Colors.BOLD}{'='*70}{Colors.END}\n")


def print_step(step: int, text: str):
    """Print step number and description."""
    print(f"{Colors.CYAN}{Colors.BOLD}📍 Step {step}: {text}{Colors.END}")


def print_success(text: str):
    print(f"{Colors.GREEN}✅ {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.BLUE}ℹ️  {text}{Colors.END}")


def print_data(text: str):
    print(f"{Colors.YELLOW}📊 {text}{Colors.END}")


async def check_system_health(client: httpx.AsyncClient) -> bool:
    """Check if system is healthy and ready."""
    print_step(0, "Checking System Health")

    try:
        response = await client.get(f"{API_BASE_URL}/api/v1/health")
    except httpx.HTTPError as e:
        print(f"{Colors.RED}❌ Cannot connect to API: {e}{Colors.END}")
        return False

    health = response.json()
    print_info(f"Status: {health['status']}")
    print_info(f"Cache backend: {health['cache_backend']}")
    print_info(f"Demo mode: {health['demo_mode']}")
    return health["status"] == "healthy"


async def fetch_wrapped(client: httpx.AsyncClient, username: str) -> tuple[int, dict, float]:
    """Request a bundle and time it."""
    start = time.perf_counter()
    response = await client.get(f"{API_BASE_URL}/api/github-wrapped", params={"username": username})
    return response.status_code, response.json(), time.perf_counter() - start


def show_bundle(bundle: dict) -> None:
    stats = bundle["stats"]
    print_data(f"User: {bundle['userInfo']['name']} ({bundle['userIdentity']})")
    print_data(f"Total contributions: {stats['totalContributions']}")
    print_data(f"Streaks: longest {stats['longestStreak']}, current {stats['currentStreak']}")
    print_data(f"Power level: {stats['powerLevel']} | {stats['universalRank']}")
    print_data(f"Rank: {stats['rank']['title']} ({stats['rank']['level']})")
    print_data(f"Work style: {stats['workStyle']}")
    for achievement in stats["specialAchievements"]:
        print_data(f"  • {achievement}")
    print_data(f"Theme: {stats['narrative']['theme']}")


async def demonstrate(username: str):
    print_header("🎁 GITHUB WRAPPED DEMONSTRATION")

    async with httpx.AsyncClient(timeout=60.0) as client:
        if not await check_system_health(client):
            print(f"{Colors.RED}❌ System not ready{Colors.END}")
            return

        print_step(1, f"First lookup for '{username}' (computes the bundle)")
        status_code, body, elapsed = await fetch_wrapped(client, username)
        if status_code != 200:
            print(f"{Colors.RED}❌ {status_code}: {body.get('message')}{Colors.END}")
            return
        print_success(f"Computed in {elapsed * 1000:.0f} ms")
        show_bundle(body)

        print_step(2, "Repeated lookup (served from cache)")
        _, again, elapsed = await fetch_wrapped(client, username)
        print_success(f"Served in {elapsed * 1000:.0f} ms")
        print_info(f"Same bundle: {again['generatedAt'] == body['generatedAt']}")

        print_step(3, "Concurrent lookups for an unseen user")
        results = await asyncio.gather(*(fetch_wrapped(client, f"{username}-twin") for _ in range(5)))
        generated = {result[1].get("generatedAt") for result in results}
        print_success(f"{len(results)} responses, {len(generated)} distinct computation(s)")

    print_header("🎉 DEMONSTRATION COMPLETE")


if __name__ == "__main__":
    print(f"\n{Colors.BOLD}Starting GitHub Wrapped Demonstration...{Colors.END}")
    print(f"{Colors.YELLOW}Make sure the server is running: DEMO_MODE=true python -m github_wrapped.api.main{Colors.END}\n")

    try:
        asyncio.run(demonstrate(sys.argv[1] if len(sys.argv) > 1 else "octocat"))
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Demo interrupted by user{Colors.END}")
