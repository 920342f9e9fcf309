"""The fixed section/subsection taxonomy news items are classified into.

The taxonomy is only ever communicated to the content-generation service through
the extraction prompt; returned section names are not checked against it.
"""

from typing import NamedTuple


class Section(NamedTuple):
    title: str
    subsections: tuple[str, ...]


SECTIONS: tuple[Section, ...] = (
    Section(
        "GOVERNMENT / POLITY",
        (
            "Cabinet Approvals",
            "Cabinet Committee",
            "CCEA (Economic Affairs)",
            "CCS (Security)",
            "CCPA (Political Affairs)",
            "Union Cabinet Decisions",
            "Acts & Bills",
            "Ordinances",
            "Constitutional Amendments",
            "Policies",
            "Rules & Regulations",
            "Government Notifications",
        ),
    ),
    Section(
        "BANKING & FINANCE",
        (
            "Banking Affairs",
            "RBI",
            "Monetary Policy",
            "Repo / Reverse Repo",
            "Digital Banking",
            "UPI / NPCI",
            "Payment Systems",
            "Financial Inclusion",
            "Insurance",
            "Pension Schemes",
            "Capital Markets",
            "SEBI",
            "NABARD",
            "EPFO",
            "ESIC",
            "LIC",
        ),
    ),
    Section(
        "BANK-WISE",
        (
            "SBI",
            "Bank of Baroda (BoB)",
            "Punjab National Bank (PNB)",
            "Canara Bank",
            "Union Bank of India",
            "Indian Bank",
            "Central Bank of India",
            "UCO Bank",
            "Regional Rural Banks (RRBs)",
            "Small Finance Banks",
            "Payments Banks",
        ),
    ),
    Section(
        "LAUNCHES",
        (
            "App Launches",
            "Portal Launches",
            "Scheme Launches",
            "Mission Launches",
            "Policy Launches",
            "Digital Platforms",
            "Mobile Applications",
            "Web Portals",
            "Financial Products",
            "Banking Apps",
            "Government Initiatives",
        ),
    ),
    Section(
        "DEFENCE",
        (
            "Military Exercises",
            "Missiles",
            "Weapons Systems",
            "Defence Acquisitions",
            "Defence PSUs",
            "Defence Manufacturing",
            "Joint Exercises",
            "Naval Exercises",
            "Air Force Exercises",
            "Army Exercises",
            "Defence Agreements",
            "CCS-linked Defence Decisions",
        ),
    ),
    Section(
        "SPORTS",
        (
            "Tournaments",
            "Winners",
            "Runners-up",
            "Hosts",
            "Venues",
            "Records",
            "Rankings",
            "Sports Awards",
            "Cups & Trophies",
            "Individual Achievements",
            "Team Achievements",
        ),
    ),
    Section(
        "MOU & COLLABORATIONS",
        (
            "MoUs",
            "Agreements",
            "Partnerships",
            "Joint Ventures",
            "International Collaborations",
            "Domestic Collaborations",
        ),
    ),
    Section(
        "APPOINTMENTS",
        (
            "Chairman",
            "CEO / MD",
            "Governors",
            "Directors",
            "Secretaries",
            "Committee Heads",
            "Brand Ambassadors",
            "Election Appointments",
        ),
    ),
    Section(
        "AWARDS & HONOURS",
        (
            "National Awards",
            "International Awards",
            "Civilian Awards",
            "Sports Awards",
            "Literary Awards",
            "Film Awards",
            "Defence Awards",
        ),
    ),
    Section(
        "INTERNATIONAL",
        (
            "International Summits",
            "Global Reports",
            "Global Indexes",
            "International Organizations",
            "UN / UNESCO",
            "IMF / World Bank",
            "Bilateral Relations",
        ),
    ),
    Section(
        "ENVIRONMENT & SCIENCE",
        (
            "Climate Change",
            "Environment Policies",
            "Ramsar Sites",
            "Wildlife Sanctuaries",
            "National Parks",
            "Scientific Missions",
            "Space Missions",
            "ISRO",
            "Research Initiatives",
        ),
    ),
    Section(
        "ECONOMY & INFRASTRUCTURE",
        (
            "Economic Affairs",
            "GDP / Inflation",
            "Budget",
            "MSP",
            "Infrastructure Projects",
            "Roads / Railways",
            "Ports & Airports",
            "Power & Energy",
        ),
    ),
    Section(
        "CORPORATE & BUSINESS",
        (
            "Acquisitions",
            "Mergers",
            "Stake Sales",
            "Disinvestment",
            "Corporate Deals",
            "PSUs",
        ),
    ),
    Section(
        "FIRST-IN-NEWS",
        (
            "First in India",
            "First in World",
            "First-ever Initiative",
            "Unique Achievements",
        ),
    ),
    Section(
        "STATE CURRENT AFFAIRS",
        (
            "State Schemes",
            "State Policies",
            "State Awards",
            "State Appointments",
            "State Infrastructure",
        ),
    ),
    Section(
        "OTHERS (MISC)",
        (
            "Census",
            "Committees",
            "Reports",
            "Rankings",
            "Days & Themes",
            "Foundations / Anniversaries",
        ),
    ),
)

# Used for items that fit none of the sections above
FALLBACK_SECTION = Section("Current Affairs", ("CA",))
