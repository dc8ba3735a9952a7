import argparse

from config import METRICS_PATH, METRICS_BIND, VERBOSE
from prometheus_exporter import FactorioCollector, create_app


def parse_bind(value):
    """Split "host:port" into (host, port). Used as an argparse type."""
    host, sep, port = value.rpartition(":")
    if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
        raise argparse.ArgumentTypeError(f"invalid bind address {value!r}, expected host:port")
    return host.strip("[]"), int(port)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Prometheus exporter for Factorio metrics.json")
    parser.add_argument("--path", default=METRICS_PATH,
                        help="The path to the script-output/metrics.json file")
    parser.add_argument("--bind", type=parse_bind, default=METRICS_BIND,
                        help="The hostname and port to listen on")
    parser.add_argument("--verbose", action="store_true", default=VERBOSE,
                        help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    host, port = args.bind

    collector = FactorioCollector(args.path, verbose=args.verbose)
    app = create_app(collector)

    print(f"🚀 Starting Prometheus exporter on {host}:{port} (reading {args.path})")
    app.run(host=host, port=port, threaded=True)


if __name__ == "__main__":
    main()
