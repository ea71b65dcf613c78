"""
Frame preprocessing for the Rock/Paper/Scissors classifier.

Every frame, whatever its resolution, is brought down to the 64x64
single-channel representation the models are trained on.
"""
import numpy as np
import torch
import torch.nn.functional as F

from rps_dl.classes import IMAGE_HEIGHT, IMAGE_WIDTH
from rps_dl.scope import TensorScope


def image_to_tensor(frame: np.ndarray) -> torch.Tensor:
    """
    Convert a color frame into a normalized 64x64x1 grayscale tensor.

    Grayscale is the plain mean of the three channels (no luminance weighting),
    and the resize uses bilinear interpolation with aligned corners so the
    corner pixels of the frame land exactly on the corners of the output.

    Args:
        frame: H x W x 3 color frame (any channel order)

    Returns:
        float32 tensor of shape (64, 64, 1) with values in 0..255
    """
    with TensorScope() as scope:
        pixels = scope.track(torch.from_numpy(np.ascontiguousarray(frame)).float())
        gray = scope.track(pixels.mean(dim=2))
        # interpolate works on (N, C, H, W)
        batched = scope.track(gray.unsqueeze(0).unsqueeze(0))
        resized = scope.track(F.interpolate(
            batched,
            size=(IMAGE_HEIGHT, IMAGE_WIDTH),
            mode='bilinear',
            align_corners=True
        ))
        result = scope.track(resized[0].permute(1, 2, 0).contiguous())
        return scope.keep(result)


def to_display_image(tensor: torch.Tensor) -> np.ndarray:
    """
    Turn a normalized tensor into a paintable uint8 image.

    The tensor is scaled into 0..1 and mapped back to pixel intensities,
    the same way a canvas would render it.
    """
    with TensorScope() as scope:
        unit = scope.track(tensor.reshape(IMAGE_HEIGHT, IMAGE_WIDTH) / 255.0)
        pixels = scope.track((unit.clamp(0.0, 1.0) * 255.0).round())
        return pixels.to(torch.uint8).cpu().numpy()
