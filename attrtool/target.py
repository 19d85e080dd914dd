"""Target classes and cronus-style target names."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# (fapi class, device tree class, cronus class)
_CLASS_MAP = (
    ("TARGET_TYPE_ABUS", "smpgroup", "smpgroup"),
    ("TARGET_TYPE_CAPP", "capp", "capp"),
    ("TARGET_TYPE_CORE", "core", "c"),
    ("TARGET_TYPE_DIMM", "dimm", "dimm"),
    ("TARGET_TYPE_DMI", "dmi", "dmi"),
    ("TARGET_TYPE_EQ", "eq", "eq"),
    ("TARGET_TYPE_EX", "ex", "ex"),
    ("TARGET_TYPE_FC", "fc", "fc"),
    ("TARGET_TYPE_IOHS", "iohs", "iohs"),
    ("TARGET_TYPE_L4", "l4", "l4"),
    ("TARGET_TYPE_MBA", "mba", "mba"),
    ("TARGET_TYPE_MC", "mc", "mc"),
    ("TARGET_TYPE_MCA", "mca", "mca"),
    ("TARGET_TYPE_MCBIST", "mcbist", "mcbist"),
    ("TARGET_TYPE_MCC", "mcc", "mcc"),
    ("TARGET_TYPE_MCS", "mcs", "mcs"),
    ("TARGET_TYPE_MEMBUF_CHIP", "membuf_chip", "membuf_chip"),
    ("TARGET_TYPE_MEM_PORT", "mem_port", "mem_port"),
    ("TARGET_TYPE_MI", "mi", "mi"),
    ("TARGET_TYPE_NMMU", "nmmu", "nmmu"),
    ("TARGET_TYPE_OBUS", "obus", "obus"),
    ("TARGET_TYPE_OBUS_BRICK", "obus_brick", "obus_brick"),
    ("TARGET_TYPE_OCMB_CHIP", "ocmb", "ocmb"),
    ("TARGET_TYPE_OMI", "omi", "omi"),
    ("TARGET_TYPE_OMIC", "omic", "omic"),
    ("TARGET_TYPE_PAU", "pau", "pau"),
    ("TARGET_TYPE_PAUC", "pauc", "pauc"),
    ("TARGET_TYPE_PEC", "pec", "pec"),
    ("TARGET_TYPE_PERV", "chiplet", "perv"),
    ("TARGET_TYPE_PERV", "perv", "perv"),
    ("TARGET_TYPE_PHB", "phb", "phb"),
    ("TARGET_TYPE_PMIC", "pmic", "pmic"),
    ("TARGET_TYPE_PPE", "ppe", "ppe"),
    ("TARGET_TYPE_PROC_CHIP", "proc", "proc_chip"),
    ("TARGET_TYPE_SBE", "sbe", "sbe"),
    ("TARGET_TYPE_SYSTEM", "root", "system"),
    ("TARGET_TYPE_XBUS", "xbus", "xbus"),
    ("TARGET_TYPE_NX", "nx", "nx"),
    ("TARGET_TYPE_OCC", "occ", "occ"),
    ("TARGET_TYPE_TPM", "tpm", "tpm"),
    ("TARGET_TYPE_BMC", "bmc", "bmc"),
)


def _atoi(token):
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


def dtree_to_fapi_class(dtree_class):
    """FAPI class of a device tree class, or None."""
    return next((fapi for fapi, dtree, _ in _CLASS_MAP if dtree == dtree_class), None)


def cronus_to_dtree_class(cronus_class):
    """Device tree class of a cronus class, or None."""
    return next(
        (dtree for _, dtree, cronus in _CLASS_MAP if cronus == cronus_class), None
    )


def dtree_to_cronus_class(dtree_class):
    """Cronus class of a device tree class, or None."""
    return next(
        (cronus for _, dtree, cronus in _CLASS_MAP if dtree == dtree_class), None
    )


def node_name_to_class(name):
    """Class of a device tree node name: unit address and index removed."""
    if name == "":
        return "root"
    base = next((part for part in name.split("@") if part), None)
    if base is None:
        raise ValueError(f"invalid node name {name!r}")
    return base.rstrip("0123456789")


@dataclass
class CronusTarget:
    """The parts of a cronus target name such as ``p10.c:k0:n0:s0:p00:c1``.

    Parts that are absent are None.
    """

    chip_name: str | None = None
    class_name: str | None = None
    cage: int | None = None
    node: int | None = None
    slot: int | None = None
    chip_position: int | None = None
    chip_unit: int | None = None

    @classmethod
    def parse(cls, name, chip):
        """Split a cronus target name; chip is the expected chip name."""
        target = cls()
        tokens = iter([token for token in name.split(":") if token])

        def invalid():
            return ValueError(f"invalid cronus target {name!r}")

        token = next(tokens, None)
        if token is None:
            raise invalid()

        if token.startswith("p"):
            parts = [part for part in token.split(".") if part]
            if not parts or parts[0] != chip:
                raise invalid()
            target.chip_name = parts[0]
            if len(parts) > 1:
                target.class_name = parts[1]
            token = next(tokens, None)
            if token is None:
                raise invalid()

        if token.startswith("k"):
            target.cage = _atoi(token[1:])
            token = next(tokens, None)
            if token is None:
                return target

        if token.startswith("n"):
            target.node = _atoi(token[1:])
            token = next(tokens, None)
            if token is None:
                raise invalid()

        if token.startswith("s"):
            target.slot = _atoi(token[1:])
            token = next(tokens, None)
            if token is None:
                raise invalid()

        if token.startswith("p"):
            target.chip_position = _atoi(token[1:])
            token = next(tokens, None)
            if token is None:
                return target

        if token.startswith("c"):
            target.chip_unit = _atoi(token[1:])

        return target

    def _require(self, *names):
        missing = [name for name in names if getattr(self, name) is None]
        if missing:
            raise ValueError(f"cronus target lacks {', '.join(missing)}")

    def __str__(self):
        if self.chip_name is None:
            self._require("cage")
            return f"k{self.cage}"

        if self.class_name is None:
            self._require("cage", "node", "slot", "chip_position")
            return (
                f"{self.chip_name}:k{self.cage}:n{self.node}:s{self.slot}"
                f":p{self.chip_position:02d}"
            )

        self._require("cage", "node", "slot", "chip_unit")
        prefix = f"{self.chip_name}.{self.class_name}:k{self.cage}:n{self.node}:s{self.slot}"
        if self.chip_position is None:
            # targets outside a processor, e.g. bmc or tpm
            return f"{prefix}:c{self.chip_unit}"
        return f"{prefix}:p{self.chip_position:02d}:c{self.chip_unit}"