"""
Design job processing.

Drives one design job from the uploaded photo to the composited result:

    wall analysis -> parse -> select panel set -> layout -> pixels -> composite

and owns the job's status transitions. Jobs are independent asyncio tasks;
the only shared state is the read-only panel catalog and the job store.
"""

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Optional, Set, Union

from config import AppConfig
from generation.gemini_client import GeminiWallAnalyzer
from generation.gemini_editor import GeminiImageEditor
from generation.prompt_templates import get_panel_edit_prompt
from generation.response_parser import WallEstimate, parse_wall_analysis
from panels.catalog import DEFAULT_CATALOG, PanelCatalog, PanelSet, select_best_panel_set
from panels.layout import (
    DEFAULT_LAYOUT_CONFIG,
    RANDOM_STRATEGY,
    LayoutConfig,
    generate_layout,
    get_strategy_names,
    resolve_strategy,
)
from utils.coordinates import map_to_pixels
from utils.image_processing import (
    create_wall_mask,
    decode_data_url,
    encode_data_url,
    extract_from_letterbox,
    get_image_size,
    letterbox_image,
)
from utils.panel_compositor import DEFAULT_STYLE, CompositeStyle, composite

from .store import JobStatus


@dataclass
class DesignOutcome:
    """Result of processing a single design job."""
    success: bool
    job_id: int
    panel_set_id: Optional[int] = None
    strategy: str = ""
    panel_count: int = 0
    wall: Optional[WallEstimate] = None
    error: Optional[str] = None
    elapsed_seconds: float = 0


class DesignProcessor:
    """
    Runs design jobs against a job store.

    The analyzer must provide ``async analyze_wall(image_bytes, prompt) -> str``;
    the editor (mask-edit pipeline only) must provide
    ``async edit_image(image_bytes, mask_bytes, prompt) -> bytes | None``; the
    store must provide ``update_status(job_id, status, processed_image_url=None)``.
    """

    def __init__(
        self,
        store,
        analyzer,
        editor=None,
        catalog: PanelCatalog = DEFAULT_CATALOG,
        layout_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
        style: CompositeStyle = DEFAULT_STYLE,
        strategy: str = "standard",
        pipeline: str = "procedural",
        rng: Optional[random.Random] = None,
        render_workers: Optional[int] = None,
    ):
        if strategy != RANDOM_STRATEGY and strategy not in get_strategy_names():
            raise ValueError(f"Unknown layout strategy '{strategy}'")
        if pipeline not in ("procedural", "mask_edit"):
            raise ValueError(f"Unknown pipeline '{pipeline}'")
        if pipeline == "mask_edit" and editor is None:
            raise ValueError("The mask_edit pipeline requires an image editor")

        self.store = store
        self.analyzer = analyzer
        self.editor = editor
        self.catalog = catalog
        self.layout_config = layout_config
        self.style = style
        self.strategy = strategy
        self.pipeline = pipeline
        self.rng = rng or random.Random()
        self.render_workers = render_workers
        self._tasks: Set[asyncio.Task] = set()

    def start_design(
        self,
        job_id: int,
        image: Union[str, bytes],
        prompt: Optional[str] = None,
    ) -> asyncio.Task:
        """Schedule a job without waiting for it. Must be called inside a running loop."""
        task = asyncio.create_task(self.process_design(job_id, image, prompt))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def process_design(
        self,
        job_id: int,
        image: Union[str, bytes],
        prompt: Optional[str] = None,
    ) -> DesignOutcome:
        """
        Process a design job end to end. Never raises.

        Args:
            job_id: Id of a pending job in the store
            image: Original photo as a data URL or encoded bytes
            prompt: Free-text user prompt

        Returns:
            DesignOutcome describing what happened
        """
        start_time = time.time()
        outcome = DesignOutcome(success=False, job_id=job_id)

        try:
            print(f"[ProcessDesign] Starting processing for design {job_id}")
            self.store.update_status(job_id, JobStatus.PROCESSING)

            image_bytes = image if isinstance(image, bytes) else decode_data_url(image)
            image_width, image_height = get_image_size(image_bytes)
            print(f"[ProcessDesign] Original image size: {image_width}x{image_height}")

            raw_analysis = await self.analyzer.analyze_wall(image_bytes, prompt)
            wall = parse_wall_analysis(raw_analysis)
            outcome.wall = wall

            set_id = select_best_panel_set(wall.width_ft, wall.height_ft, self.catalog)
            panel_set = self.catalog.get(set_id)
            outcome.panel_set_id = set_id
            print(f"[ProcessDesign] Selected {panel_set.name} for wall "
                  f"{wall.width_ft}ft x {wall.height_ft}ft")

            if self.pipeline == "mask_edit":
                result_png = await self._render_with_edit(image_bytes, wall, panel_set, prompt)
                outcome.strategy = "mask_edit"
                outcome.panel_count = panel_set.total_panel_count
            else:
                strategy = resolve_strategy(self.strategy, self.rng)
                layout = generate_layout(
                    set_id,
                    wall.width_ft,
                    wall.height_ft,
                    strategy=strategy,
                    catalog=self.catalog,
                    config=self.layout_config,
                )
                rects = map_to_pixels(layout, wall.bounds, image_width, image_height)
                print(f"[ProcessDesign] {len(rects)}/{len(layout)} panels survived pixel mapping")

                result_png = await asyncio.to_thread(
                    composite, image_bytes, rects, self.style, self.render_workers
                )
                outcome.strategy = strategy
                outcome.panel_count = len(rects)

            self.store.update_status(job_id, JobStatus.COMPLETED, encode_data_url(result_png))

            outcome.success = True
            outcome.elapsed_seconds = time.time() - start_time
            print(f"[OK] Design {job_id} completed in {outcome.elapsed_seconds:.1f}s")
            return outcome

        except Exception as e:
            print(f"[ERR] [ProcessDesign] Error processing design {job_id}: {type(e).__name__}: {e}")
            self._mark_failed(job_id)
            outcome.success = False
            outcome.error = str(e) or type(e).__name__
            outcome.elapsed_seconds = time.time() - start_time
            return outcome

    def _mark_failed(self, job_id: int) -> None:
        try:
            self.store.update_status(job_id, JobStatus.FAILED)
        except Exception as e:
            print(f"[ERR] Could not mark design {job_id} as failed: {e}")

    async def _render_with_edit(
        self,
        image_bytes: bytes,
        wall: WallEstimate,
        panel_set: PanelSet,
        prompt: Optional[str],
    ) -> bytes:
        """Letterbox, edit inside the wall mask, then restore the original frame."""
        canvas_png, info = await asyncio.to_thread(letterbox_image, image_bytes)
        mask_png = create_wall_mask(info, wall.bounds)

        edited = await self.editor.edit_image(
            canvas_png,
            mask_png,
            get_panel_edit_prompt(panel_set, prompt),
        )
        if not edited:
            raise ValueError("Image edit returned no image")

        return await asyncio.to_thread(extract_from_letterbox, edited, info)


def build_processor(config: AppConfig, store) -> DesignProcessor:
    """Wire a DesignProcessor to the Gemini clients described by config."""
    analyzer = GeminiWallAnalyzer(api_key=config.gemini_api_key, model_name=config.vision_model)
    editor = None
    if config.pipeline == "mask_edit":
        editor = GeminiImageEditor(api_key=config.gemini_api_key, model_name=config.edit_model)

    return DesignProcessor(
        store=store,
        analyzer=analyzer,
        editor=editor,
        strategy=config.layout_strategy,
        pipeline=config.pipeline,
        render_workers=config.render_workers,
    )
