# utils.py
import numpy as np
import torch


def set_seed(seed):
    np.random.seed(seed)
    torch.manual_seed(seed)


def make_generator(seed, device="cpu"):
    gen = torch.Generator(device=device)
    gen.manual_seed(seed)
    return gen


def append_metric(path, value):
    # one plain number per line, errors propagate
    with open(path, "a") as f:
        f.write(f"{value}\n")


def format_duration(seconds):
    if seconds < 1.0:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes, secs = divmod(seconds, 60.0)
    return f"{int(minutes)} min {secs:.1f} s"
