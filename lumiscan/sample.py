"""Built-in sample batch: facts from a nanomedicine formulation paper."""

from lumiscan.row import RowInput

SAMPLE_ROWS: tuple[RowInput, ...] = (
    RowInput(section="Therapeutic Context", key="Indication", value="Breast cancer", confidence=0.86, source_span="p2-3"),
    RowInput(section="Drug Molecule", key="API", value="Doxorubicin", confidence=0.93, source_span="p3"),
    RowInput(section="Nanocarrier", key="Type", value="WPI-CHI-HA nanoparticles", confidence=0.88, source_span="p4"),
    RowInput(section="Formulation", key="Method", value="Ionic gelation + adsorption", confidence=0.77, source_span="p5"),
    RowInput(section="Characterization", key="Size (DLS, Z-avg)", value="142 nm", confidence=0.91, source_span="Fig 2A"),
    RowInput(section="Characterization", key="PDI", value="0.18", confidence=0.84, source_span="Fig 2A"),
    RowInput(section="Characterization", key="Zeta potential", value="+21.5 mV", confidence=0.82, source_span="Fig 2B"),
    RowInput(section="In vitro", key="Cell line", value="U2OS", confidence=0.80, source_span="p7"),
    RowInput(section="In vitro", key="Uptake (24h)", value="High (confocal)", confidence=0.74, source_span="Fig 4"),
    RowInput(
        section="Manufacturability",
        key="Scalability note",
        value="Shear-sensitive; microfluidics suggested",
        confidence=0.66,
        source_span="p9",
    ),
)
