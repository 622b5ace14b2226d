# renderer/tone_mapping.py
import logging
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

# Rec. 709 luminance
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


def _sanitize(accumulated: np.ndarray) -> np.ndarray:
    """NaN to black, infinities to white, negatives to zero."""
    return np.maximum(np.nan_to_num(accumulated, nan=0.0, posinf=1.0, neginf=0.0), 0.0)


def _encode(linear: np.ndarray, gamma: float) -> np.ndarray:
    """Clamp display-referred values to [0, 1], gamma encode and quantize."""
    return (np.clip(linear, 0.0, 1.0) ** (1.0 / gamma) * 255).astype("uint8")


def gamma_correct(accumulated: np.ndarray, gamma: float = 2.0) -> np.ndarray:
    """
    Clamp a linear radiance image to [0, 1] and apply 1/gamma encoding.
    """
    return _encode(_sanitize(accumulated), gamma)


def reinhard_tone_mapping(accumulated, exposure=1.0, white_point=1.0, gamma=2.2):
    """
    Compress radiance with x / (1 + x / white_point) after scaling by exposure.
    """
    scaled = _sanitize(accumulated) * exposure
    return _encode(scaled / (1.0 + scaled / white_point), gamma)


def auto_exposure_tone_mapping(accumulated, gamma=2.2, target_midgray=0.18):
    """Reinhard with the exposure that brings mean luminance to target_midgray."""
    mean_luminance = float((_sanitize(accumulated) @ LUMINANCE_WEIGHTS).mean())
    exposure = target_midgray / max(mean_luminance, 1e-5)
    return reinhard_tone_mapping(accumulated, exposure=exposure, gamma=gamma)


TONE_MAPPERS = {
    "gamma": gamma_correct,
    "reinhard": reinhard_tone_mapping,
    "auto": auto_exposure_tone_mapping,
}


def save_image(framebuffer, path: str, tone_mapper: str = "gamma") -> None:
    """Tone map a FrameBuffer's mean radiance and write it with Pillow."""
    try:
        mapper = TONE_MAPPERS[tone_mapper]
    except KeyError:
        raise ValueError(f"Unknown tone mapper {tone_mapper!r}; "
                         f"choose from {sorted(TONE_MAPPERS)}") from None
    pixels = mapper(framebuffer.to_array())
    Image.fromarray(pixels).save(path)
    logger.info(f"Wrote {framebuffer.width}x{framebuffer.height} image to {path}")
