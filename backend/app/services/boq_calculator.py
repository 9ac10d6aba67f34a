"""
Bill of quantities for a list of assembly lines.

Lines are grouped by assembly module; each assembly is expanded into its
materials with quantities multiplied by the line quantity, and the same
materials are consolidated across assemblies.
"""

from typing import Dict, List, Sequence

from app.models.assembly import AssemblyModule
from app.schemas.template import (
    BoqAssemblyLine,
    BoqMaterialLine,
    BoqModule,
    BoqSummary,
    ConsolidatedMaterial,
)

MODULE_ORDER = list(AssemblyModule)


def _module_rank(module) -> int:
    try:
        return MODULE_ORDER.index(module)
    except ValueError:
        return len(MODULE_ORDER)


def line_cost(line) -> float:
    """Cost of one template line; requires the assembly and its materials to be loaded."""
    if line.assembly is None:
        return 0.0
    return line.assembly.unit_cost * (line.quantity or 0)


def template_cost(lines: Sequence) -> float:
    return sum(line_cost(line) for line in lines)


def _assembly_line(number: str, line) -> BoqAssemblyLine:
    assembly = line.assembly
    quantity = line.quantity or 0
    materials = []
    for index, link in enumerate(assembly.materials, start=1):
        material = link.material
        if material is None:
            continue
        material_quantity = (link.quantity or 0) * quantity
        materials.append(BoqMaterialLine(
            no=f"{number}.{index}",
            material_id=material.id,
            name=material.name,
            manufacturer=material.manufacturer,
            part_number=material.part_number,
            unit=material.unit,
            quantity=material_quantity,
            unit_price=material.price or 0,
            total_price=material_quantity * (material.price or 0),
        ))
    return BoqAssemblyLine(
        no=number,
        assembly_id=assembly.id,
        name=assembly.name,
        unit=assembly.unit,
        quantity=quantity,
        unit_price=assembly.unit_cost,
        total_price=line_cost(line),
        materials=materials,
    )


def _consolidate(modules: List[BoqModule]) -> List[ConsolidatedMaterial]:
    totals: Dict = {}
    for module in modules:
        for assembly in module.assemblies:
            for row in assembly.materials:
                entry = totals.get(row.material_id)
                if entry is None:
                    entry = ConsolidatedMaterial(
                        material_id=row.material_id,
                        name=row.name,
                        manufacturer=row.manufacturer,
                        part_number=row.part_number,
                        unit=row.unit,
                        unit_price=row.unit_price,
                    )
                    totals[row.material_id] = entry
                entry.total_quantity += row.quantity
                entry.total_cost += row.total_price
    return sorted(totals.values(), key=lambda m: m.name)


def build_boq(lines: Sequence) -> BoqSummary:
    """
    Expand template lines into a numbered bill of quantities.

    Args:
        lines: Objects with ``assembly`` (materials loaded) and ``quantity``

    Returns:
        Modules numbered 1, 2, ...; assemblies n.m; materials n.m.k
    """
    by_module: Dict = {}
    for line in lines:
        if line.assembly is None:
            continue
        by_module.setdefault(line.assembly.module, []).append(line)

    modules = []
    for module_number, module in enumerate(sorted(by_module, key=_module_rank), start=1):
        assemblies = [
            _assembly_line(f"{module_number}.{index}", line)
            for index, line in enumerate(by_module[module], start=1)
        ]
        modules.append(BoqModule(
            no=str(module_number),
            module=module,
            assemblies=assemblies,
            total_price=sum(a.total_price for a in assemblies),
        ))

    materials = _consolidate(modules)
    return BoqSummary(
        modules=modules,
        materials=materials,
        total_assemblies=sum(len(m.assemblies) for m in modules),
        total_materials=sum(len(a.materials) for m in modules for a in m.assemblies),
        total_cost=sum(m.total_price for m in modules),
    )
