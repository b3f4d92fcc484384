from __future__ import annotations

import torch

from netscope.ir.tensor import Tensor

MID_VALUE = 0.5


def normalize_for_display(tensor: Tensor, constant_value: float = MID_VALUE) -> Tensor:
    """Min-max rescale the whole buffer into [0, 1].

    A constant tensor has no range to stretch, so every element becomes
    ``constant_value`` instead.
    """
    storage = tensor.storage
    if storage.numel() == 0:
        return Tensor(storage, tensor.shape)
    lo = storage.min()
    hi = storage.max()
    if torch.equal(lo, hi):
        values = torch.full_like(storage, constant_value)
    else:
        # float32 spans can overflow hi - lo
        wide = storage.double()
        values = ((wide - lo.double()) / (hi.double() - lo.double())).float()
    return Tensor(values, tensor.shape)
