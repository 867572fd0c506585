import asyncio
from core.initialization import initialize_components, load_configuration
from utils.config_validator import validate_config
from utils.logger import setup_logger

async def run_bot() -> None:
    """
    Entrypoint coroutine for the signal desk simulation.

    Loads the configuration, configures a dedicated logger and starts the
    scanner.  The activity feed is relayed to the same logger, so the
    terminal and `logs/signal_desk.log` show every detection, analysis and
    trade as it happens.  Runs for RUN_SECONDS (forever when 0).
    """
    # Load environment configuration (config.env)
    config = load_configuration()
    validate_config(config)

    logger = setup_logger("SignalDesk", to_console=True)

    components = initialize_components(config, logger=logger)
    desk = components["desk"]

    desk.start()
    try:
        run_seconds = desk.config.get_run_seconds()
        if run_seconds > 0:
            await asyncio.sleep(run_seconds)
        else:
            await asyncio.Event().wait()
    except asyncio.CancelledError:
        logger.info("Desk cancelled – shutting down")
    finally:
        stats = desk.stats()
        logger.info(
            "📊 Signals: %s | Trades: %s | Win rate: %s%% | Total P&L: %+.2f%%",
            stats["signals_detected"],
            stats["trade_count"],
            stats["win_rate"],
            stats["total_pnl"],
        )
        await desk.aclose()

def main():
    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"❌ Desk terminated due to error: {e}")

if __name__ == "__main__":
    main()
