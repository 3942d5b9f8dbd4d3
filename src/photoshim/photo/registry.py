"""Boundary names of every photo entry point."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from photoshim.core.status import Status
from photoshim.photo import cloning, denoising, hdr, inpainting, npr


@dataclass(frozen=True)
class EntryPoint:
    """Static metadata for a single entry point."""

    name: str
    func: Callable[..., Status | None]
    outputs: int = 1


ENTRY_POINTS: dict[str, EntryPoint] = {
    entry.name: entry
    for entry in (
        EntryPoint("ColorChange", cloning.color_change),
        EntryPoint("SeamlessClone", cloning.seamless_clone),
        EntryPoint("IlluminationChange", cloning.illumination_change),
        EntryPoint("TextureFlattening", cloning.texture_flattening),
        EntryPoint("FastNlMeansDenoising", denoising.fast_nl_means_denoising),
        EntryPoint("FastNlMeansDenoisingWithParams", denoising.fast_nl_means_denoising_with_params),
        EntryPoint("FastNlMeansDenoisingColored", denoising.fast_nl_means_denoising_colored),
        EntryPoint("FastNlMeansDenoisingColoredWithParams", denoising.fast_nl_means_denoising_colored_with_params),
        EntryPoint("FastNlMeansDenoisingColoredMulti", denoising.fast_nl_means_denoising_colored_multi),
        EntryPoint(
            "FastNlMeansDenoisingColoredMultiWithParams",
            denoising.fast_nl_means_denoising_colored_multi_with_params,
        ),
        EntryPoint("MergeMertens_Create", hdr.merge_mertens_create),
        EntryPoint("MergeMertens_CreateWithParams", hdr.merge_mertens_create_with_params),
        EntryPoint("MergeMertens_Process", hdr.merge_mertens_process),
        EntryPoint("AlignMTB_Create", hdr.align_mtb_create),
        EntryPoint("AlignMTB_CreateWithParams", hdr.align_mtb_create_with_params),
        EntryPoint("AlignMTB_Process", hdr.align_mtb_process),
        EntryPoint("DetailEnhance", npr.detail_enhance),
        EntryPoint("EdgePreservingFilter", npr.edge_preserving_filter),
        EntryPoint("PencilSketch", npr.pencil_sketch, outputs=2),
        EntryPoint("Stylization", npr.stylization),
        EntryPoint("PhotoInpaint", inpainting.photo_inpaint),
    )
}


def get_entry_point(name: str) -> EntryPoint:
    try:
        return ENTRY_POINTS[name]
    except KeyError:
        raise KeyError(f"Unknown entry point: {name}") from None
