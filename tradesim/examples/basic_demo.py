"""
Basic demonstration of the market simulator.
"""

import argparse
from typing import Optional, Sequence

from tradesim import configure_logging
from tradesim.config.settings import SimulationConfig
from tradesim.core.models import PriceAlert
from tradesim.core.types import OrderSide, OrderType, StrategyType
from tradesim.simulation.driver import SimulationDriver


def create_demo_driver(config: Optional[SimulationConfig] = None) -> SimulationDriver:
    """Factory function to create a started demo simulation"""
    driver = SimulationDriver(config or SimulationConfig())
    driver.start_session()
    return driver


def print_portfolio(driver: SimulationDriver):
    status = driver.get_status()
    print(f"Cash: ${status['balance']:,.2f}")
    print(f"Portfolio Value: ${status['portfolio_value']:,.2f} (P&L ${status['total_pnl']:+,.2f})")
    if status['holdings']:
        print("Holdings:")
        for instrument_id, holding in status['holdings'].items():
            symbol = driver.get_instrument(instrument_id).symbol
            print(f"  {symbol}: {holding['amount']:g} @ ${holding['average_price']:.2f} "
                  f"-> ${holding['current_price']:.2f} ({holding['pnl_percent']:+.2f}%)")
    else:
        print("No holdings")
    print(f"Orders: {status['filled_orders']} filled, {status['pending_orders']} pending, "
          f"{status['canceled_orders']} canceled")


def demo_manual_trading(driver: SimulationDriver, ticks: int):
    """Market buy, limit orders and a few ticks of settlement"""
    print("=== Manual Trading Demo ===")
    btc = driver.instruments[0]
    price = driver.store.latest_price(btc.id)
    print(f"{btc.symbol} trading at ${price:.2f}")

    order = driver.place_order(btc.id, OrderSide.BUY, OrderType.MARKET, amount=5)
    print(f"Market buy: {order}")

    limit_buy = driver.place_order(btc.id, OrderSide.BUY, OrderType.LIMIT, amount=2, price=price * 0.995)
    limit_sell = driver.place_order(btc.id, OrderSide.SELL, OrderType.LIMIT, amount=2, price=price * 1.005)
    print(f"Limit buy @ ${limit_buy.price:.2f}, limit sell @ ${limit_sell.price:.2f}")

    for _ in range(ticks):
        result = driver.advance_tick()
        for filled in result.filled_orders:
            print(f"  Tick {driver.tick_count}: filled {filled.side.value} {filled.amount:g} "
                  f"@ ${filled.price:.2f}")
    print_portfolio(driver)


def demo_trading_bot(driver: SimulationDriver, ticks: int):
    """Enable RSI and SMA bots and let them trade"""
    print("\n=== Trading Bot Demo ===")
    eth, aapl = driver.instruments[1], driver.instruments[2]
    driver.update_bot_config(eth.id, enabled=True, strategy=StrategyType.RSI,
                             params={'rsiOversold': 40, 'rsiOverbought': 60})
    driver.update_bot_config(aapl.id, enabled=True, strategy=StrategyType.SMA)

    for _ in range(ticks):
        result = driver.advance_tick()
        for instrument_id, decision in result.bot_decisions.items():
            symbol = driver.get_instrument(instrument_id).symbol
            print(f"  Tick {driver.tick_count} {symbol}: {decision.action.value} - {decision.reason}")
    print_portfolio(driver)


def demo_alerts(driver: SimulationDriver, ticks: int):
    """Alerts just above and below the current price"""
    print("\n=== Price Alert Demo ===")
    msft = driver.instruments[3]
    price = driver.store.latest_price(msft.id)

    def notify(alert: PriceAlert):
        print(f"  ALERT {msft.symbol} {alert.condition.value} ${alert.price:.2f} "
              f"(now ${driver.store.latest_price(alert.instrument_id):.2f})")

    driver.register_alert_callback(notify)
    driver.add_alert(msft.id, price * 1.002, 'above')
    driver.add_alert(msft.id, price * 0.998, 'below')
    driver.run(ticks, tick_delay=0)

    remaining = [a for a in driver.alerts.get_alerts(msft.id) if not a.triggered]
    print(f"Untriggered alerts remaining: {len(remaining)}")


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Run the TradeSim demo")
    parser.add_argument('--ticks', type=int, default=20, help="Ticks per demo section")
    parser.add_argument('--seed', type=int, default=None, help="Random seed")
    parser.add_argument('--config', default=None, help="JSON configuration file")
    parser.add_argument('--log-level', default=None)
    args = parser.parse_args(argv)

    config = SimulationConfig.from_file(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        config.market.seed = args.seed
    configure_logging(args.log_level or config.log_level)

    driver = create_demo_driver(config)
    demo_manual_trading(driver, args.ticks)
    demo_trading_bot(driver, args.ticks)
    demo_alerts(driver, args.ticks)
    return driver


if __name__ == "__main__":
    main()
