"""
Built-in tender templates: default outline, focus area and compliance keywords
per purchase domain. Domains without a template fall back to "General Goods".
"""

DEFAULT_TENDER_TEMPLATES: dict[str, dict] = {
    "IT Services & Software": {
        "domain": "IT Services & Software",
        "focus_area": "Technical feasibility, data security, SLA (Service Level Agreements), and licensing.",
        "compliance_keywords": ["GDPR", "ISO 27001", "Uptime Guarantee", "Data Privacy"],
        "sections": [
            "1. Executive Summary\n"
            "   1.1 Project Background\n"
            "      1.1.1 Current Challenges & Drivers\n"
            "      1.1.2 Strategic Goals\n"
            "   1.2 Scope Overview\n"
            "      1.2.1 In-Scope Systems\n"
            "      1.2.2 Out-of-Scope Items",
            "2. Technical Architecture & Scope\n"
            "   2.1 Proposed Solution Architecture\n"
            "      2.1.1 High-Level Component Diagram\n"
            "      2.1.2 Data Flow & Interoperability\n"
            "   2.2 Infrastructure Requirements\n"
            "      2.2.1 Cloud/On-Premise Hosting Specs\n"
            "      2.2.2 Disaster Recovery Strategy",
            "3. Functional Requirements\n"
            "   3.1 User Experience (UX)\n"
            "      3.1.1 Interface Accessibility Standards\n"
            "   3.2 Core Features Modules\n"
            "      3.2.1 User Authentication & Role Management\n"
            "      3.2.2 Reporting & Analytics Dashboard",
            "4. Non-Functional Requirements\n"
            "   4.1 Security Standards\n"
            "      4.1.1 Encryption (At Rest & In Transit)\n"
            "      4.1.2 Identity & Access Management (IAM)\n"
            "   4.2 Performance Metrics\n"
            "      4.2.1 Maximum Latency Thresholds",
            "5. Implementation Roadmap\n"
            "   5.1 Project Phases\n"
            "      5.1.1 Requirement Analysis Phase\n"
            "      5.1.2 UAT & Go-Live Phase",
            "6. Service Level Agreement (SLA) & Support\n"
            "   6.1 Support Tiers\n"
            "      6.1.1 Incident Response Times\n"
            "   6.2 Maintenance Policies\n"
            "      6.2.1 Patch Management Procedures",
            "7. Vendor Qualifications & References\n"
            "   7.1 Corporate Profile\n"
            "   7.2 Project References",
            "8. Commercial Proposal Structure\n"
            "   8.1 Pricing Model\n"
            "   8.2 Payment Terms",
        ],
    },
    "Furniture & Fittings": {
        "domain": "Furniture & Fittings",
        "focus_area": "Ergonomics, durability, materials, warranty, and installation services.",
        "compliance_keywords": ["ISO 9001", "Fire Safety Standards", "Ergonomic Certification", "Warranty"],
        "sections": [
            "1. Project Overview\n   1.1 Introduction\n   1.2 Site Details",
            "2. Design & Aesthetic Requirements\n   2.1 Design Language\n   2.2 Space Planning",
            "3. Item Specifications\n   3.1 Workstations & Desks\n   3.2 Seating Solutions",
            "4. Quality & Standards\n   4.1 Material Compliance\n   4.2 Testing & Certification",
            "5. Delivery & Installation Logistics\n   5.1 Site Access & Staging\n   5.2 Installation Services",
            "6. Warranty & After-Sales Service\n   6.1 Warranty Coverage\n   6.2 Maintenance Support",
            "7. Pricing Schedule\n   7.1 Bill of Materials\n   7.2 Services Costs",
        ],
    },
    "Logistics & Transport": {
        "domain": "Logistics & Transport",
        "focus_area": "Route optimization, vehicle standards, insurance, and tracking capabilities.",
        "compliance_keywords": ["Vehicle Safety Standards", "Insurance Coverage", "Tracking API", "Timeliness"],
        "sections": [
            "1. Operational Scope\n   1.1 Service Requirements\n   1.2 Service Hours",
            "2. Fleet & Vehicle Requirements\n   2.1 Vehicle Specifications\n   2.2 Fleet Maintenance",
            "3. Tracking & Technology\n   3.1 Real-Time Visibility\n   3.2 Reporting Capabilities",
            "4. Safety & Compliance\n   4.1 Driver Qualifications\n   4.2 Insurance Coverage",
            "5. Route & Volume Estimates\n   5.1 Volume Projections\n   5.2 Route Planning",
            "6. Rate Card & Fuel Surcharge Mechanism\n   6.1 Pricing Structure\n   6.2 Variable Costs",
        ],
    },
    "Medical Equipment": {
        "domain": "Medical Equipment",
        "focus_area": "Patient safety, regulatory compliance, training, and maintenance.",
        "compliance_keywords": ["FDA Approved", "CE Marking", "ISO 13485", "Clinical Application"],
        "sections": [
            "1. Clinical Needs Assessment\n   1.1 Purpose of Acquisition\n   1.2 Clinical Setting",
            "2. Technical Specifications\n   2.1 Device Performance\n   2.2 Physical Characteristics",
            "3. Regulatory & Quality Assurance\n   3.1 Certification Requirements\n   3.2 Safety Standards",
            "4. Installation & Implementation\n   4.1 Site Preparation\n   4.2 Application Training",
            "5. Maintenance & Lifecycle\n   5.1 Warranty & Service\n   5.2 Software Upgrades",
            "6. Total Cost of Ownership\n   6.1 Capital Expenditure\n   6.2 Operational Expenditure",
        ],
    },
    "Construction & Renovation": {
        "domain": "Construction & Renovation",
        "focus_area": "Safety regulations, bill of quantities (BOQ), timeline, and site management.",
        "compliance_keywords": ["Building Codes", "HSE Standards", "Contractor All Risk Insurance", "Permits"],
        "sections": [
            "1. Project Scope & Site Location\n   1.1 Site Overview\n   1.2 Existing Conditions",
            "2. Architectural & Structural Specifications\n   2.1 Civil Works\n   2.2 Finishes & Fittings",
            "3. MEP Services (Mechanical, Electrical, Plumbing)\n   3.1 Electrical Systems\n   3.2 HVAC & Plumbing",
            "4. Health, Safety & Environment (HSE)\n   4.1 Site Safety Protocols\n   4.2 Environmental Controls",
            "5. Project Timeline & Milestones\n   5.1 Schedule of Works\n   5.2 Handover",
            "6. Quality Assurance & Defect Liability\n   6.1 QA/QC Procedures\n   6.2 Liability Period",
            "7. Bill of Quantities (BOQ) Summary\n   7.1 Pricing Breakdown\n   7.2 Provisional Sums",
        ],
    },
    "General Goods": {
        "domain": "General Goods",
        "focus_area": "Quality, cost-effectiveness, and reliability.",
        "compliance_keywords": ["Standard Trade Terms", "Quality Assurance"],
        "sections": [
            "1. Introduction\n   1.1 Tender Context\n   1.2 Purchaser Profile",
            "2. Scope of Supply\n   2.1 Product Specifications\n   2.2 Packaging & Labeling",
            "3. Service Requirements\n   3.1 Delivery Terms\n   3.2 Returns & Rejections",
            "4. Technical Specifications\n   4.1 Compliance\n   4.2 Documentation",
            "5. Inspection & Acceptance\n   5.1 Testing Procedures\n   5.2 Non-Conformance",
            "6. Commercial Terms\n   6.1 Pricing\n   6.2 Terms",
        ],
    },
}
