"""Basic usage examples."""
import numpy as np
from PIL import Image

from clusterizer import ImageQuantizer, QuantizeWorker
from clusterizer.utils.logger import setup_logging


def main():
    setup_logging()

    # Decoding stays outside the library: turn any image into a flat RGBA buffer.
    image = Image.open("examples/photo.png").convert("RGBA")
    width, height = image.size
    buffer = np.asarray(image, dtype=np.uint8).reshape(-1)

    # --- Example 1: Two colors with defaults ---
    quantizer = ImageQuantizer()
    two_colors = quantizer.quantize(buffer, width, height)
    Image.fromarray(two_colors.reshape(height, width, 4)).save(
        "examples/photo_2_colors.png"
    )

    # --- Example 2: Fast preview preset with custom options ---
    quantizer = ImageQuantizer(preset="preview")
    quantizer.quantize(buffer, width, height, {"cluster_quantity": 8, "seed": 42})
    print(
        f"Preview: {quantizer.last_result.iterations} iterations, "
        f"state={quantizer.last_result.state.value}"
    )

    # --- Example 3: Background process with request-style options ---
    with QuantizeWorker() as worker:
        response = worker.run(
            buffer, width, height, {"clusterQuantity": 4, "xStep": 2, "yStep": 2}
        )

    if response["status"] == "success":
        Image.fromarray(response["buffer"].reshape(height, width, 4)).save(
            "examples/photo_4_colors.png"
        )
    else:
        print(f"Quantization failed: {response['message']}")


if __name__ == "__main__":
    main()
