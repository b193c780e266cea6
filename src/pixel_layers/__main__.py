import argparse
import logging
import sys
from typing import Optional

from PIL import Image

from pixel_layers import Engine
from pixel_layers.blend import BLEND_FUNC
from pixel_layers.layer import Layer
from pixel_layers.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="pixel-layers command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    blend_parser = subparsers.add_parser(
        "blend", help="Blend an image onto a base image of the same size"
    )
    blend_parser.add_argument("base_file", help="Base image file")
    blend_parser.add_argument("layer_file", help="Layer image file")
    blend_parser.add_argument("output_file", help="Output image file")
    _add_layer_options(blend_parser)

    fill_parser = subparsers.add_parser(
        "fill", help="Blend a solid color layer onto an image"
    )
    fill_parser.add_argument("base_file", help="Base image file")
    fill_parser.add_argument("output_file", help="Output image file")
    fill_parser.add_argument(
        "-c", "--color", required=True, help="Fill color, e.g. '#ff8800'"
    )
    _add_layer_options(fill_parser)

    subparsers.add_parser("modes", help="List registered blend modes")

    return parser.parse_args(argv)


def _add_layer_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-m", "--mode", default="normal", help="Blend mode.")
    parser.add_argument(
        "-o", "--opacity", type=float, default=100.0, help="Opacity in percent."
    )


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("pixel_layers").setLevel(logging.DEBUG)
    else:
        logging.getLogger("pixel_layers").setLevel(logging.INFO)

    if args.command == "modes":
        for name in sorted(BLEND_FUNC):
            print(name)
        return None

    engine = Engine.from_pil(Image.open(args.base_file))

    if args.command == "blend":
        layer_image = Image.open(args.layer_file)
        if layer_image.size != (engine.width, engine.height):
            logger.error(
                "Layer size %r does not match base size %r"
                % (layer_image.size, (engine.width, engine.height))
            )
            return 1
        source = Engine.from_pil(layer_image).pixel_data

        def effect(layer: Layer) -> None:
            layer.pixel_data[:] = source

    else:

        def effect(layer: Layer) -> None:
            layer.fill_color(args.color)

    def configured(layer: Layer) -> None:
        layer.set_blending_mode(args.mode).set_opacity(args.opacity)
        effect(layer)

    try:
        engine.new_layer(configured)
    except ValueError as e:
        logger.error(str(e))
        return 1

    engine.topil().save(args.output_file)
    logger.info("Saved %s" % args.output_file)
    return None


if __name__ == "__main__":
    sys.exit(main())
