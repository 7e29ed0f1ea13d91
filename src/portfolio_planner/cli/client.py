"""CLI to drive the portfolio planner API by hand.

Usage:
  poetry run portfolio-client health
  poetry run portfolio-client users create ana@example.com
  poetry run portfolio-client onboarding info 1 --name "Ana Rao" --state Karnataka --city Bengaluru --investment 100000 --percentage 20 --rate 5
  poetry run portfolio-client assets stocks --search tata
  poetry run portfolio-client onboarding select 1 <stock-id> <stock-id>
  poetry run portfolio-client portfolio adjust 1 --stock <stock-id>=30000 --gold 20000 --savings 30000
"""
import argparse
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def _show(response: httpx.Response) -> int:
    response.raise_for_status()
    print_json(response.json())
    return 0


def _profile_body(args: argparse.Namespace) -> dict:
    if args.percentage is not None:
        threshold = {"kind": "percentage", "value": args.percentage}
    else:
        threshold = {"kind": "fixed", "value": args.fixed}
    return {
        "full_name": args.name,
        "location": {"state": args.state, "city": args.city, "country": args.country},
        "initial_investment_amount": args.investment,
        "savings_threshold": threshold,
        "annual_savings_interest_rate": args.rate,
    }


def _parse_amounts(pairs: list[str]) -> dict[str, float]:
    amounts: dict[str, float] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected ID=AMOUNT, got {pair!r}")
        amounts[key] = float(value)
    return amounts


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    return _show(client.get("/"))


def cmd_users_create(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.post("/users", json={"email": args.email}))


def cmd_users_status(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get(f"/users/{args.user_id}/status"))


def cmd_onboarding_info(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.post(f"/onboarding/{args.user_id}/initial-info", json=_profile_body(args)))


def cmd_onboarding_select(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"selected_stock_ids": args.stock_ids}
    return _show(client.post(f"/onboarding/{args.user_id}/select-stocks", json=body))


def cmd_profile_get(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get(f"/profile/{args.user_id}"))


def cmd_profile_update(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.put(f"/profile/{args.user_id}", json=_profile_body(args)))


def cmd_portfolio_show(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get(f"/portfolio/{args.user_id}"))


def cmd_portfolio_predictions(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get(f"/portfolio/{args.user_id}/predictions"))


def cmd_portfolio_adjust(client: httpx.Client, args: argparse.Namespace) -> int:
    allocations = _parse_amounts(args.stock)
    if args.gold is not None:
        allocations["gold"] = args.gold
    body = {"proposed_allocations": allocations, "proposed_savings": args.savings}
    return _show(client.put(f"/portfolio/{args.user_id}/adjust", json=body))


def cmd_stocks_update(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.put(f"/stocks/{args.user_id}", json={"selected_stock_ids": args.stock_ids}))


def cmd_assets_stocks(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {"search": args.search, "limit": args.limit, "live": args.live}
    response = client.get("/assets/stocks", params=params)
    response.raise_for_status()
    data = response.json()
    print(f"Found {len(data)} stocks")
    print_json(data)
    return 0


def cmd_gold_latest(client: httpx.Client, args: argparse.Namespace) -> int:
    return _show(client.get("/gold-prices/latest", params={"state": args.state}))


def _add_profile_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("user_id", type=int)
    p.add_argument("--name", required=True, help="Full name")
    p.add_argument("--state", required=True)
    p.add_argument("--city", required=True)
    p.add_argument("--country", default="India")
    p.add_argument("--investment", type=float, required=True, help="Total investment (INR)")
    threshold = p.add_mutually_exclusive_group(required=True)
    threshold.add_argument("--percentage", type=float, help="Safe savings as % of investment")
    threshold.add_argument("--fixed", type=float, help="Safe savings as a fixed amount")
    p.add_argument("--rate", type=float, required=True, help="Annual savings interest rate (%%)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Call portfolio planner API routes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")

    users = subparsers.add_parser("users", help="User routes (/users)")
    users_sub = users.add_subparsers(dest="users_cmd", required=True)
    p = users_sub.add_parser("create", help="POST /users")
    p.add_argument("email")
    p = users_sub.add_parser("status", help="GET /users/{user_id}/status")
    p.add_argument("user_id", type=int)

    onboarding = subparsers.add_parser("onboarding", help="Onboarding routes (/onboarding)")
    onboarding_sub = onboarding.add_subparsers(dest="onboarding_cmd", required=True)
    _add_profile_args(onboarding_sub.add_parser("info", help="POST /onboarding/{user_id}/initial-info"))
    p = onboarding_sub.add_parser("select", help="POST /onboarding/{user_id}/select-stocks")
    p.add_argument("user_id", type=int)
    p.add_argument("stock_ids", nargs="+")

    profile = subparsers.add_parser("profile", help="Profile routes (/profile)")
    profile_sub = profile.add_subparsers(dest="profile_cmd", required=True)
    p = profile_sub.add_parser("get", help="GET /profile/{user_id}")
    p.add_argument("user_id", type=int)
    _add_profile_args(profile_sub.add_parser("update", help="PUT /profile/{user_id}"))

    portfolio = subparsers.add_parser("portfolio", help="Portfolio routes (/portfolio)")
    portfolio_sub = portfolio.add_subparsers(dest="portfolio_cmd", required=True)
    p = portfolio_sub.add_parser("show", help="GET /portfolio/{user_id}")
    p.add_argument("user_id", type=int)
    p = portfolio_sub.add_parser("predictions", help="GET /portfolio/{user_id}/predictions")
    p.add_argument("user_id", type=int)
    p = portfolio_sub.add_parser("adjust", help="PUT /portfolio/{user_id}/adjust")
    p.add_argument("user_id", type=int)
    p.add_argument("--stock", action="append", default=[], metavar="ID=AMOUNT")
    p.add_argument("--gold", type=float, default=None)
    p.add_argument("--savings", type=float, required=True)

    stocks = subparsers.add_parser("stocks", help="Stock selection routes (/stocks)")
    stocks_sub = stocks.add_subparsers(dest="stocks_cmd", required=True)
    p = stocks_sub.add_parser("update", help="PUT /stocks/{user_id}")
    p.add_argument("user_id", type=int)
    p.add_argument("stock_ids", nargs="+")

    assets = subparsers.add_parser("assets", help="Catalog routes (/assets)")
    assets_sub = assets.add_subparsers(dest="assets_cmd", required=True)
    p = assets_sub.add_parser("stocks", help="GET /assets/stocks")
    p.add_argument("--search", default="")
    p.add_argument("--limit", type=int, default=50)
    p.add_argument("--live", action="store_true", help="Quote current prices")

    gold = subparsers.add_parser("gold", help="Gold price routes (/gold-prices)")
    gold_sub = gold.add_subparsers(dest="gold_cmd", required=True)
    p = gold_sub.add_parser("latest", help="GET /gold-prices/latest")
    p.add_argument("state")

    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    handlers = {
        "users": {"create": cmd_users_create, "status": cmd_users_status},
        "onboarding": {"info": cmd_onboarding_info, "select": cmd_onboarding_select},
        "profile": {"get": cmd_profile_get, "update": cmd_profile_update},
        "portfolio": {
            "show": cmd_portfolio_show,
            "predictions": cmd_portfolio_predictions,
            "adjust": cmd_portfolio_adjust,
        },
        "stocks": {"update": cmd_stocks_update},
        "assets": {"stocks": cmd_assets_stocks},
        "gold": {"latest": cmd_gold_latest},
    }

    cmd = args.command
    if cmd == "health":
        handler = cmd_health
    else:
        handler = handlers[cmd][getattr(args, f"{cmd}_cmd")]

    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
