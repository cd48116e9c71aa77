"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches either the backend
status API or the marketing site.
"""

import argparse

from showcase.bootstrap import bootstrap_create_api_application, bootstrap_create_site_application
from showcase.config import config_load_api_settings, config_load_site_settings
from showcase.runtime import runtime_configure_logging, runtime_serve


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="DevSecOps pipeline showcase runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "site"),
        help="Runtime command: `api` starts the backend status API, `site` starts the marketing site",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "site":
        site_settings = config_load_site_settings()
        runtime_configure_logging(site_settings.log_level)
        runtime_serve(
            bootstrap_create_site_application(),
            host=site_settings.host,
            port=site_settings.port,
            shutdown_timeout_seconds=site_settings.shutdown_timeout_seconds,
            banner_title="DevSecOps Pipeline Platform Site",
            banner_fields={
                "Environment": site_settings.node_env,
                "Version": site_settings.app_version,
                "Backend": site_settings.backend_url,
            },
        )
        return

    api_settings = config_load_api_settings()
    runtime_configure_logging(api_settings.log_level)
    runtime_serve(
        bootstrap_create_api_application(),
        host=api_settings.host,
        port=api_settings.port,
        shutdown_timeout_seconds=api_settings.shutdown_timeout_seconds,
        banner_title="DevSecOps Backend API Server",
        banner_fields={
            "Environment": api_settings.node_env,
            "Version": api_settings.app_version,
        },
    )


if __name__ == "__main__":
    main()
