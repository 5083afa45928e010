"""Command-line front end for the leverage P&L calculator."""

import argparse
import json
import math
import sys
from pathlib import Path
from typing import Optional

from .calculator.formatting import format_currency, format_percentage, format_price_change
from .calculator.pnl import PnLResult, TradeInputs
from .calculator.validators import check_capital
from .config.defaults import FeeTier, PositionType
from .config.loader import ConfigLoader
from .config.provider import ConfigProvider
from .engine import TradeCalculatorEngine
from .logging.config import configure_logging


def finite_float(text: str) -> float:
    """argparse type: a float that is neither NaN nor infinite."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"must be a finite number: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradecalc",
        description="Leverage trading P&L calculator",
    )
    parser.add_argument("--entry-price", type=finite_float, help="Entry price")
    parser.add_argument("--capital", type=finite_float, help="Capital (margin) in USD")
    parser.add_argument("--leverage", type=finite_float, help="Leverage multiplier")
    parser.add_argument(
        "--position",
        choices=[p.value for p in PositionType],
        help="Position direction",
    )
    parser.add_argument(
        "--fee-tier",
        choices=[t.value for t in FeeTier],
        help="Fee tier",
    )
    parser.add_argument(
        "--take-profit",
        help="Take profit price; accepts + / - expressions such as '50000+1500'",
    )
    parser.add_argument(
        "--stop-loss",
        help="Stop loss price; accepts + / - expressions such as '50000-700'",
    )
    parser.add_argument("--config-dir", type=Path, help="Directory holding calculator.yaml")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the remote configuration sheet and local store",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser


def resolve_inputs(engine: TradeCalculatorEngine, args: argparse.Namespace) -> TradeInputs:
    """Fill inputs from arguments, falling back to configured defaults."""
    seed = engine.default_inputs()

    entry_price = args.entry_price if args.entry_price is not None else seed.entry_price
    capital = args.capital if args.capital is not None else seed.capital
    leverage = engine.clamp_leverage(
        args.leverage if args.leverage is not None else seed.leverage
    )
    position_type = PositionType(args.position) if args.position else seed.position_type
    fee_tier = FeeTier(args.fee_tier) if args.fee_tier else seed.fee_tier

    targets = engine.suggest_targets(entry_price, capital, leverage, fee_tier)
    take_profit = targets.take_profit
    stop_loss = targets.stop_loss
    if args.take_profit is not None:
        take_profit = engine.normalize_target_input(args.take_profit, take_profit)
    if args.stop_loss is not None:
        stop_loss = engine.normalize_target_input(args.stop_loss, stop_loss)

    return TradeInputs(
        entry_price=entry_price,
        capital=capital,
        leverage=leverage,
        position_type=position_type,
        fee_tier=fee_tier,
        take_profit=take_profit,
        stop_loss=stop_loss,
    )


def render_result(inputs: TradeInputs, result: PnLResult) -> str:
    """Render the two-column result table."""
    position = PositionType(inputs.position_type).value
    lines = [
        f"Position:      {position} x{inputs.leverage:g} on {format_currency(inputs.capital)}",
        f"Entry price:   {inputs.entry_price:,.2f}",
        f"Take profit:   {inputs.take_profit:,.2f}",
        f"Stop loss:     {inputs.stop_loss:,.2f}",
        "",
        f"Position size: {format_currency(result.position_size)}",
        f"Entry fee:     {format_currency(result.entry_fee)}",
        f"Exit fee:      {format_currency(result.exit_fee)}",
        f"Total fees:    {format_currency(result.total_fees)}",
        "",
        f"{'':14} {'Take profit':>24} {'Stop loss':>24}",
        f"{'Price change':14} "
        f"{format_price_change(result.profit_price_change, result.profit_price_change_percent):>24} "
        f"{format_price_change(result.loss_price_change, result.loss_price_change_percent):>24}",
        f"{'P&L':14} {format_currency(result.profit_pnl):>24} {format_currency(result.loss_pnl):>24}",
        f"{'ROI':14} {format_percentage(result.profit_roi):>24} {format_percentage(result.loss_roi):>24}",
        f"{'ROI x leverage':14} {format_percentage(result.profit_leveraged_roi):>24} "
        f"{format_percentage(result.loss_leveraged_roi):>24}",
    ]
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    provider = ConfigProvider(loader=ConfigLoader.create(args.config_dir))
    if not args.offline:
        provider.refresh()

    engine = TradeCalculatorEngine(provider)
    inputs = resolve_inputs(engine, args)

    problems = engine.validate_inputs(inputs)
    problems.extend(check_capital(inputs.capital, engine.snapshot.config.limits))
    for problem in problems:
        print(f"{problem.field}: {problem.message}", file=sys.stderr)

    result = engine.calculate(inputs)

    if args.json:
        payload = result.to_dict()
        payload["position_type"] = PositionType(inputs.position_type).value
        payload["take_profit"] = inputs.take_profit
        payload["stop_loss"] = inputs.stop_loss
        payload["config_source"] = engine.snapshot.source.value
        print(json.dumps(payload, indent=2))
    else:
        print(render_result(inputs, result))

    return 0 if result.available else 1


if __name__ == "__main__":
    sys.exit(main())
