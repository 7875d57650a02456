"""
CLI entry point

Re-routes the elbow connectors of a PowerPoint presentation
"""
import sys
import logging
import argparse
from pathlib import Path

from pptxconnect.io.pptx_loader import PPTXLoader
from pptxconnect.io.pptx_writer import PPTXWriter
from pptxconnect.logger import RoutingLogger
from pptxconnect.config import RoutingConfig, default_config
from pptxconnect.model.intermediate import ConnectorElement
from pptxconnect.routing.engine import ConnectorRouter
from pptxconnect.routing.reconnect import reroute_elements


def _count_routable(elements) -> int:
    ids = {element.id for element in elements}
    return sum(
        1 for element in elements
        if isinstance(element, ConnectorElement) and element.is_elbow
        and element.source_id in ids and element.target_id in ids
    )


def main(argv=None):
    """Main function"""
    parser = argparse.ArgumentParser(
        description='Re-route elbow connectors in PowerPoint presentations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pptxconnect input.pptx output.pptx
  pptxconnect input.pptx output.pptx --min-clearance 30
  pptxconnect input.pptx output.pptx --samples 20 --verbose
        """
    )
    parser.add_argument('input', type=str, help='Path to input PowerPoint file')
    parser.add_argument('output', type=str, help='Path to output PowerPoint file')
    parser.add_argument('--min-clearance', type=float, default=default_config.min_exit_clearance,
                        help='Distance travelled out of a connection site before turning (px, default: %(default)s)')
    parser.add_argument('--perimeter-clearance', type=float, default=default_config.perimeter_clearance,
                        help='Band kept around shapes by perimeter routes (px, default: %(default)s)')
    parser.add_argument('--fallback-offset', type=float, default=default_config.fallback_offset,
                        help='Offset of the best-effort route (px, default: %(default)s)')
    parser.add_argument('--samples', type=int, default=default_config.collision_samples,
                        help='Containment samples per segment (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    try:
        config = RoutingConfig(
            min_exit_clearance=args.min_clearance,
            perimeter_clearance=args.perimeter_clearance,
            fallback_offset=args.fallback_offset,
            collision_samples=args.samples,
        )
    except ValueError as e:
        parser.error(str(e))

    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.exists():
        print(f"Input file not found: {input_path}")
        sys.exit(1)

    print(f"Parsing: {input_path}")

    try:
        logger = RoutingLogger()
        if args.verbose:
            logger.logger.setLevel(logging.DEBUG)

        # Load presentation
        loader = PPTXLoader(logger=logger, config=config)
        slides = loader.load_file(input_path)

        if not slides:
            print("No slides found in file")
            sys.exit(1)

        router = ConnectorRouter(logger=logger, config=config)
        writer = PPTXWriter(logger=logger, config=config)
        prs, blank_layout = writer.create_presentation(loader.extract_slide_size())

        # Process each slide
        routed_count = 0
        for elements in slides:
            routed_count += _count_routable(elements)
            writer.add_slide(prs, blank_layout, reroute_elements(router, elements))

        # Save
        prs.save(str(output_path))
        print(f"Saved {output_path} ({len(slides)} slides, {routed_count} connectors re-routed)")

        # Display warnings
        warnings = logger.get_warnings()
        if warnings:
            print(f"\nWarnings ({len(warnings)}):")
            for warning in warnings:
                print(f"  - {warning.message}")

    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
