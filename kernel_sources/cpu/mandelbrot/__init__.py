# "band" fills a contiguous range of image rows with grayscale intensities.
from kernel_sources.cpu.mandelbrot import band  # noqa: F401  registers kernels
