"""Batch signature extraction pipeline and command line interface."""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config, ProcessingSettings, get_default_config, load_config
from .detection import detect
from .exceptions import ConfigurationError, ImageLoadError, ImageSaveError
from .parallel import extract_regions
from .processors import get_image_files, load_image, save_image
from .utils.logging_utils import ProcessingProgress, get_logger, log_processing_stats, setup_logging

logger = get_logger(__name__)

SUMMARY_FILENAME = "extraction_summary.json"


class SignatureExtractionPipeline:
    """Detects and extracts signature regions from page images on disk."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_default_config()
        self.output_dir = Path(self.config.output.output_dir)
        self.results: List[Dict[str, Any]] = []

    def process_image(self, image_path: Path) -> List[Path]:
        """Detect regions on one page and save each processed crop as PNG.

        Returns:
            Paths of the written files (empty if nothing was found)

        Raises:
            ImageLoadError: If the page cannot be loaded
        """
        source = load_image(image_path)
        rects = detect(source, self.config.detection)

        crops = extract_regions(
            source,
            rects,
            self.config.processing,
            max_workers=self.config.max_workers,
            border_density=self.config.border_removal.density_threshold,
        )

        outputs = []
        regions = []
        prefix = self.config.output.name_prefix
        for index, (rect, data) in enumerate(zip(rects, crops), start=1):
            if not data:
                continue
            output_path = self.output_dir / f"{image_path.stem}_{prefix}_{index}.png"
            save_image(data, output_path)
            outputs.append(output_path)
            regions.append({"file": output_path.name, "rect": rect.to_dict()})

        logger.info("%s: %d region(s) extracted", image_path.name, len(outputs))
        self.results.append({
            "source": str(image_path),
            "image_size": [int(source.shape[1]), int(source.shape[0])],
            "regions": regions,
        })
        return outputs

    def run(self, input_path: Path, show_progress: bool = True) -> List[Path]:
        """Process a single image or every image in a directory."""
        input_path = Path(input_path)
        if input_path.is_dir():
            image_files = get_image_files(input_path)
        elif input_path.is_file():
            image_files = [input_path]
        else:
            logger.error("Input not found: %s", input_path)
            return []

        if not image_files:
            logger.warning("No images found in %s", input_path)
            return []

        self.results = []
        outputs: List[Path] = []
        with log_processing_stats("signature extraction", logger) as stats:
            with ProcessingProgress("Extracting signatures", len(image_files), logger,
                                    enabled=show_progress) as progress:
                for image_path in image_files:
                    try:
                        written = self.process_image(image_path)
                    except (ImageLoadError, ImageSaveError) as e:
                        logger.error("Failed %s: %s", image_path.name, e)
                        self.results.append({"source": str(image_path), "error": str(e)})
                        stats["files_failed"] += 1
                        progress.update(success=False, item=image_path.name)
                        continue
                    outputs.extend(written)
                    stats["files_processed"] += 1
                    stats["regions_extracted"] += len(written)
                    progress.update(item=image_path.name)

        if self.config.output.write_summary:
            self.write_summary()
        return outputs

    def write_summary(self) -> Path:
        """Write the per-image results collected by :meth:`run`."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        summary_path = self.output_dir / SUMMARY_FILENAME
        summary = {
            "created": datetime.now().isoformat(timespec="seconds"),
            "settings": self.config.processing.model_dump(),
            "files": self.results,
            "total_regions": sum(len(r.get("regions", [])) for r in self.results),
        }
        with summary_path.open("w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)
        return summary_path


def build_config(args: argparse.Namespace) -> Config:
    """Load the configuration file (if any) and apply command line overrides."""
    config = load_config(args.config) if args.config else get_default_config()

    updates = {}
    if args.threshold is not None:
        updates["threshold"] = args.threshold
    if args.invert:
        updates["invert"] = True
    if args.remove_borders:
        updates["remove_borders"] = True
    if args.no_enhance:
        updates["enhance"] = False
    if updates:
        config.processing = ProcessingSettings(**{**config.processing.model_dump(), **updates})

    if args.output:
        config.output.output_dir = args.output
    if args.workers:
        config.max_workers = args.workers
    if args.verbose:
        config.logging.level = "DEBUG"
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface."""
    parser = argparse.ArgumentParser(description="Extract signature regions from scanned pages")
    parser.add_argument("input", help="Input image file or directory")
    parser.add_argument("-o", "--output", help="Output directory (default: use config)")
    parser.add_argument("-c", "--config", help="Configuration file (JSON, YAML or TOML)")
    parser.add_argument("--threshold", type=int, help="Ink luminance threshold (0-255)")
    parser.add_argument("--invert", action="store_true", help="Light ink on dark paper")
    parser.add_argument("--remove-borders", action="store_true", help="Erase ruled lines and boxes")
    parser.add_argument("--no-enhance", action="store_true", help="Keep original colours")
    parser.add_argument("--workers", type=int, help="Number of worker processes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except (ConfigurationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(
        level=config.logging.level,
        log_file=config.logging.log_file,
        use_rich=config.logging.use_rich,
        format_style=config.logging.format_style,
    )

    pipeline = SignatureExtractionPipeline(config)
    outputs = pipeline.run(Path(args.input))

    if not outputs:
        logger.warning("No signatures were extracted.")
        return 1
    logger.info("Extracted %d signature(s) to %s", len(outputs), pipeline.output_dir)
    return 0


if __name__ == "__main__":
    # Required for multiprocessing on Windows
    from multiprocessing import freeze_support
    freeze_support()
    sys.exit(main())
