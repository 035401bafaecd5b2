# backend/binsurvey/services/streets/gazetteer.py
from dataclasses import dataclass
from typing import Optional

BIN_TYPES = ("Green", "Blue", "Brown", "Yellow")

GLYFADA_STREETS = (
    "Achilleos",
    "Adikithiron",
    "Agamemnonos",
    "Agias Lavras",
    "Agias Triados",
    "Agias Varvaras",
    "Agiou Fanouriou",
    "Agiou Gerassimou",
    "Agiou Ioanni",
    "Agiou Konstadinou",
    "Agiou Mina",
    "Agiou Nektariou",
    "Agiou Nikolaou Avenue",
    "Agiou Pavlou",
    "Agiou Trifonos",
    "Agiou Vassiliou",
    "Agissilaou",
    "Agriniou",
    "Aidiniou",
    "Akrokorinthou",
    "Akrotiriou",
    "Alkiviadou",
    "Alon",
    "Alonnissou",
    "Alsous",
    "Amerikis",
    "Amfissis",
    "Ammochostou",
    "Amorgou",
    "Anafis",
    "Analipseos",
    "Anatolikis Romilias",
    "Anaxagora",
    "Androutsou Odissea",
    "Antheon",
    "Apo Anatolis",
    "Apollonos",
    "Arachthou",
    "Archimidous",
    "Archipelagous",
    "Aretis",
    "Argirokastrou",
    "Argous",
    "Aristidou",
    "Aristippou",
    "Aristofanous",
    "Aristomenous",
    "Aristotelous",
    "Arkadias",
    "Artemidos",
    "Artemissiou",
    "Artis",
    "Asklipiou",
    "Astipaleas",
    "Athanatou Konstadinou Avenue",
    "Athonos",
    "Attikis",
    "Avlonas",
    "Avras",
    "Azofikis",
    "Bakogianni Pavlou",
    "Botsari Markou",
    "Bouboulinas",
    "Bournova",
    "Chalkis",
    "Chanion",
    "Chimarras",
    "Chiou",
    "Choras",
    "Chrissostomou Smirnis",
    "Dardanellion",
    "Daskalogianni",
    "Daskaroli",
    "Davaki",
    "Delfon",
    "Dervenakion",
    "Despoti Karavassili",
    "Diadochou Pavlou",
    "Diakou Athanassiou",
    "Dikeossinis",
    "Dilinon",
    "Dilou",
    "Dimela Manoli",
    "Dimokratias",
    "Dimosthenis",
    "Dionissiou",
    "Doiranis",
    "Doukissis Plakentias",
    "Doxapatri",
    "Dragoumi",
    "Egnatias",
    "Eirinis",
    "Eleftheriou Venizelou",
    "Elenis",
    "Ellinidos",
    "Ermoupolis",
    "Esperidon",
    "Etolias",
    "Evaggelistrias",
    "Evrou",
    "Filellinon",
    "Flisvou",
    "Fokidos",
    "Fotila",
    "Frangiska",
    "Galanis",
    "Galinis",
    "Garibaldi",
    "Gennimata",
    "Georgiou",
    "Gkolemi",
    "Gounari",
    "Gregorias",
    "Grigoriou Lambraki",
    "Iassiou",
    "Ikarias",
    "Iliados",
    "Ionos",
    "Ippokratous",
    "Ithakis",
    "Kalamatas",
    "Kalimnos",
    "Kalogera",
    "Kanari",
    "Kapodistrias",
    "Karpenissiou",
    "Karyatides",
    "Kassandras",
    "Konstantinou Karamanli",
    "Korinthou",
    "Kornilia",
    "Koumoundourou",
    "Kriti",
    "Kyprou",
    "Kyrillos",
    "Laodikis",
    "Laskareos",
    "Lazaraki",
    "Leoforos Metaxa",
    "Leoforos Vouliagmenis",
    "Lesvou",
    "Lidorikiou",
    "Livadias",
    "Loukianou",
    "Lykavitou",
    "Makrigianni",
    "Mantinias",
    "Markou Mpotsari",
    "Megalou Alexandrou",
    "Messinias",
    "Metaxa",
    "Miaouli",
    "Mikras Asias",
    "Militiadou",
    "Mirson",
    "Monastiraki",
    "Moreas",
    "Navarinou",
    "Nikis",
    "Odyssea",
    "Olympiados",
    "Orestou",
    "Panagi Tsaldari",
    "Papadiamandopoulou",
    "Papanastasiou",
    "Paraskevopoulos",
    "Paros",
    "Patriarchou Gregoriou",
    "Poseidonos",
    "Rigillis",
    "Salaminos",
    "Samou",
    "Seirinon",
    "Sivitanidou",
    "Solomou",
    "Spartis",
    "Stavrou",
    "Stratigou Kallari",
    "Stratigou Kontouli",
    "Syggrou",
    "Terpandrou",
    "Themistokleous",
    "Thessalias",
    "Thessalonikis",
    "Thiras",
    "Thivon",
    "Tinou",
    "Tsimiski",
    "Valaoritou",
    "Vassileos Konstantinou",
    "Vassileos Pavlou",
    "Vatatzi",
    "Veikou",
    "Xenofontos",
    "Ypsilantou",
    "Zakinthou",
    "Zisimopoulou",
)


@dataclass(frozen=True)
class Municipality:
    name: str
    latitude: float
    longitude: float
    streets: tuple[str, ...]


MUNICIPALITIES = {
    "Glyfada": Municipality("Glyfada", 37.8667, 23.7667, GLYFADA_STREETS),
}


def get_municipality(name: str) -> Optional[Municipality]:
    return MUNICIPALITIES.get(name)
