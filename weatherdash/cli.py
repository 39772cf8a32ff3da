import asyncio

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from weatherdash.config import WeatherEnv, load_config
from weatherdash.models import Coordinates, Units, WeatherProvider
from weatherdash.report import format_weather_report
from weatherdash.service import CycleOutcome, WeatherDashboard
from weatherdash.shared.logging_mixin import configure_logging, configure_logging_from_env


async def run_fetch(
    env: WeatherEnv,
    config_path: str | None,
    descriptor: str | Coordinates,
    provider: WeatherProvider | None,
    units: Units | None,
) -> CycleOutcome:
    config = load_config(config_path)
    async with WeatherDashboard(env, config) as dashboard:
        return await dashboard.fetch(descriptor, provider, units)


@click.command()
@click.argument("query", required=False)
@click.option("--lat", type=float, help="Latitude, use together with --lon")
@click.option("--lon", type=float, help="Longitude, use together with --lat")
@click.option(
    "--provider",
    "-p",
    type=click.Choice([p.value for p in WeatherProvider]),
    help="Weather provider (defaults to the config file value)",
)
@click.option(
    "--units",
    "-u",
    type=click.Choice([u.value for u in Units]),
    help="Unit system (defaults to the config file value)",
)
@click.option("--config", "config_path", type=click.Path(), help="YAML config file")
@click.option("--log-level", help="Overrides WEATHERDASH_LOG_LEVEL")
def main(query, lat, lon, provider, units, config_path, log_level):
    """Show current conditions and forecasts for a city or coordinates."""
    load_dotenv()

    if log_level:
        configure_logging(log_level)
    else:
        configure_logging_from_env()

    if query and (lat is not None or lon is not None):
        raise click.UsageError("Give either QUERY or --lat/--lon, not both.")
    if query:
        descriptor = query
    elif lat is not None and lon is not None:
        try:
            descriptor = Coordinates(lat=lat, lon=lon)
        except ValidationError as e:
            raise click.BadParameter(str(e)) from e
    else:
        raise click.UsageError("Give a city QUERY or both --lat and --lon.")

    try:
        env = WeatherEnv()
    except ValidationError as e:
        raise click.ClickException(
            "Missing required environment variable: OWM_API_KEY "
            "(OpenWeatherMap API key)"
        ) from e

    try:
        outcome = asyncio.run(
            run_fetch(
                env,
                config_path,
                descriptor,
                WeatherProvider(provider) if provider else None,
                Units(units) if units else None,
            )
        )
    except (FileNotFoundError, RuntimeError) as e:
        raise click.ClickException(str(e)) from e

    if not outcome.ok:
        click.echo(click.style(f"Error: {outcome.error}", fg="red", bold=True), err=True)
        raise SystemExit(1)

    click.echo(click.style(format_weather_report(outcome.view_model), fg="bright_cyan"))


if __name__ == "__main__":
    main()
