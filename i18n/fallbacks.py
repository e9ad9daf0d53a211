"""
Built-in fallback texts.

Used when a translation dictionary could not be loaded or lacks a key, so
the page never shows a bare key path for the main navigation, hero and
contact strings.
"""

FALLBACK_TEXTS = {
    'en': {
        'navigation.menu': 'Main navigation',
        'navigation.services': 'Services',
        'navigation.about': 'About Us',
        'navigation.contact': 'Contact',
        'common.language': 'Change Language',
        'footer.copyright': '© {{year}} Web Firm Solutions. All rights reserved.',
        'footer.websiteAriaLabel': 'Visit our website at webfirmsolutions.com',
        'contact.title': "Let's Work Together",
        'contact.subtitle': 'Ready to transform your ideas into reality?',
        'contact.notifications.success': "Message sent successfully! We'll get back to you soon.",
        'contact.notifications.savedLocally': "Message saved locally! We'll respond soon via email.",
        'contact.notifications.failed': 'Failed to send message. Please try again or contact us directly.',
        'contact.notifications.captcha': 'Please solve the captcha correctly.',
        'contact.notifications.required': 'Please fill in all required fields.',
        'contact.notifications.nameTooShort': 'Name must be at least 2 characters',
        'contact.notifications.emailInvalid': 'Please enter a valid email address',
        'contact.notifications.messageTooShort': 'Message must be at least 10 characters',
        'hero.title': 'Transform Your Ideas into',
        'hero.titleAccent': 'Ultra Interactive',
        'hero.titleEnd': 'Web Experiences',
        'hero.subtitle': 'With 20+ years of international experience, we craft interactive, SEO-optimized websites that elevate visibility and conversions. Specialized in Angular, React, and modern web technologies.',
        'hero.ctaButton': "Let's Get Started",
        'hero.secondaryButton': 'View Our Work',
        'hero.features.performance.title': 'Fast Performance',
        'hero.features.performance.description': 'Lightning-fast loading times',
        'hero.features.mobile.title': 'Mobile First',
        'hero.features.mobile.description': 'Responsive across all devices',
        'hero.features.seo.title': 'SEO Optimized',
        'hero.features.seo.description': 'Built for search engines',
        'services.title': 'Our Premium Services',
        'services.subtitle': 'We deliver cutting-edge solutions tailored to your business needs',
        'services.learnMore': 'Learn More',
        'services.web-design-ux-ui.title': 'Web Design & UX/UI',
        'services.advanced-frontend-development.title': 'Advanced Frontend Development',
        'services.technical-consulting-seo.title': 'Technical Consulting & SEO',
        'about.title': 'About Us',
        'about.description2': 'Every project gets a personalized approach focused on users and performance, delivering measurable results for our clients.',
        'whyChooseUs.title': 'Why Choose Us',
        'technologies.title': 'Our Technology Stack',
        'portfolio.title': 'Our Portfolio',
        'portfolio.all': 'All',
        'portfolio.web': 'Web',
        'portfolio.mobile': 'Mobile',
        'portfolio.design': 'Design',
    },
    'ro': {
        'navigation.menu': 'Navigare principală',
        'navigation.services': 'Servicii',
        'navigation.about': 'Despre Noi',
        'navigation.contact': 'Contact',
        'common.language': 'Schimbă Limba',
        'footer.copyright': '© {{year}} Web Firm Solutions. Toate drepturile rezervate.',
        'footer.websiteAriaLabel': 'Vizitați site-ul nostru la webfirmsolutions.com',
        'contact.title': 'Să Lucrăm Împreună',
        'contact.subtitle': 'Gata să transformăm ideile în realitate?',
        'contact.notifications.success': 'Mesaj trimis cu succes! Vă vom răspunde în curând.',
        'contact.notifications.savedLocally': 'Mesaj salvat local! Vă vom răspunde în curând prin email.',
        'contact.notifications.failed': 'Trimiterea mesajului a eșuat. Încercați din nou sau contactați-ne direct.',
        'contact.notifications.captcha': 'Vă rugăm să rezolvați corect captcha.',
        'contact.notifications.required': 'Vă rugăm să completați toate câmpurile obligatorii.',
        'contact.notifications.nameTooShort': 'Numele trebuie să aibă cel puțin 2 caractere',
        'contact.notifications.emailInvalid': 'Introduceți o adresă de email validă',
        'contact.notifications.messageTooShort': 'Mesajul trebuie să aibă cel puțin 10 caractere',
        'hero.title': 'Transformă-ți Ideile în',
        'hero.titleAccent': 'Experiențe Web Ultra Interactive',
        'hero.subtitle': 'Cu peste 20 de ani de experiență internațională, creăm site-uri web interactive, optimizate SEO, care cresc vizibilitatea și conversiile. Specializați în Angular, React și tehnologii web moderne.',
        'hero.ctaButton': 'Să Începem',
        'hero.secondaryButton': 'Vezi Lucrările Noastre',
        'hero.features.performance.title': 'Performanță Rapidă',
        'hero.features.performance.description': 'Timpi de încărcare fulgerători',
        'hero.features.mobile.title': 'Mobile First',
        'hero.features.mobile.description': 'Responsive pe toate dispozitivele',
        'hero.features.seo.title': 'Optimizat SEO',
        'hero.features.seo.description': 'Construit pentru motoarele de căutare',
        'services.title': 'Serviciile Noastre Premium',
        'services.subtitle': 'Oferim soluții de vârf adaptate nevoilor afacerii tale',
        'services.learnMore': 'Află Mai Mult',
        'services.web-design-ux-ui.title': 'Web Design & UX/UI',
        'services.advanced-frontend-development.title': 'Dezvoltare Frontend Avansată',
        'services.technical-consulting-seo.title': 'Consultanță Tehnică & SEO',
        'about.title': 'Despre Noi',
        'about.description2': 'Fiecare proiect primește o abordare personalizată centrată pe utilizatori și performanță, oferind rezultate măsurabile pentru clienții noștri.',
        'whyChooseUs.title': 'De Ce Să Ne Alegi',
        'technologies.title': 'Tehnologiile Noastre',
        'portfolio.title': 'Portofoliul Nostru',
        'portfolio.all': 'Toate',
        'portfolio.web': 'Web',
        'portfolio.mobile': 'Mobil',
        'portfolio.design': 'Design',
    },
    'uk': {
        'navigation.menu': 'Головне меню',
        'navigation.services': 'Послуги',
        'navigation.about': 'Про нас',
        'navigation.contact': 'Контакти',
        'common.language': 'Змінити мову',
        'footer.copyright': '© {{year}} Web Firm Solutions. Всі права захищені.',
        'footer.websiteAriaLabel': 'Відвідайте наш сайт webfirmsolutions.com',
        'contact.title': 'Давайте працювати разом',
        'contact.subtitle': 'Готові перетворити ідеї в реальність?',
        'contact.notifications.success': 'Повідомлення надіслано! Ми скоро з вами зв\'яжемося.',
        'contact.notifications.savedLocally': 'Повідомлення збережено локально! Ми відповімо електронною поштою.',
        'contact.notifications.failed': 'Не вдалося надіслати повідомлення. Спробуйте ще раз або зв\'яжіться з нами напряму.',
        'contact.notifications.captcha': 'Будь ласка, правильно розв\'яжіть капчу.',
        'contact.notifications.required': 'Будь ласка, заповніть усі обов\'язкові поля.',
        'contact.notifications.nameTooShort': 'Ім\'я має містити щонайменше 2 символи',
        'contact.notifications.emailInvalid': 'Введіть дійсну адресу електронної пошти',
        'contact.notifications.messageTooShort': 'Повідомлення має містити щонайменше 10 символів',
        'hero.title': 'Перетворіть свої ідеї в',
        'hero.titleAccent': 'Ультра-інтерактивні',
        'hero.titleEnd': 'Веб-досвіди',
        'hero.subtitle': 'З понад 20 роками міжнародного досвіду ми створюємо інтерактивні, SEO-оптимізовані веб-сайти, які підвищують видимість і конверсії. Спеціалізуємося на Angular, React та сучасних веб-технологіях.',
        'hero.ctaButton': 'Розпочнемо',
        'hero.secondaryButton': 'Переглянути Роботи',
        'hero.features.performance.title': 'Швидка Продуктивність',
        'hero.features.performance.description': 'Блискавична швидкість завантаження',
        'hero.features.mobile.title': 'Mobile First',
        'hero.features.mobile.description': 'Адаптивний на всіх пристроях',
        'hero.features.seo.title': 'SEO Оптимізовано',
        'hero.features.seo.description': 'Створено для пошукових систем',
        'services.title': 'Наші преміум-послуги',
        'services.subtitle': 'Ми надаємо передові рішення, адаптовані до потреб вашого бізнесу',
        'services.learnMore': 'Дізнатися Більше',
        'services.web-design-ux-ui.title': 'Веб Дизайн & UX/UI',
        'services.advanced-frontend-development.title': 'Розширена Frontend Розробка',
        'services.technical-consulting-seo.title': 'Технічний Консалтинг & SEO',
        'about.title': 'Про нас',
        'about.description2': 'Кожен проект отримує персоналізований підхід, зосереджений на користувачах та продуктивності, забезпечуючи вимірні результати для наших клієнтів.',
        'whyChooseUs.title': 'Чому обирають нас',
        'technologies.title': 'Наш технологічний стек',
        'portfolio.title': 'Наше портфоліо',
        'portfolio.all': 'Усі',
        'portfolio.web': 'Веб',
        'portfolio.mobile': 'Мобільні',
        'portfolio.design': 'Дизайн',
    },
    'de': {
        'navigation.menu': 'Hauptnavigation',
        'navigation.services': 'Dienstleistungen',
        'navigation.about': 'Über uns',
        'navigation.contact': 'Kontakt',
        'common.language': 'Sprache ändern',
        'footer.copyright': '© {{year}} Web Firm Solutions. Alle Rechte vorbehalten.',
        'footer.websiteAriaLabel': 'Besuchen Sie unsere Website unter webfirmsolutions.com',
        'contact.title': 'Lassen Sie uns zusammenarbeiten',
        'contact.subtitle': 'Bereit, Ihre Ideen in die Realität umzusetzen?',
        'contact.notifications.success': 'Nachricht erfolgreich gesendet! Wir melden uns bald bei Ihnen.',
        'contact.notifications.savedLocally': 'Nachricht lokal gespeichert! Wir antworten bald per E-Mail.',
        'contact.notifications.failed': 'Nachricht konnte nicht gesendet werden. Bitte versuchen Sie es erneut oder kontaktieren Sie uns direkt.',
        'contact.notifications.captcha': 'Bitte lösen Sie das Captcha korrekt.',
        'contact.notifications.required': 'Bitte füllen Sie alle Pflichtfelder aus.',
        'contact.notifications.nameTooShort': 'Der Name muss mindestens 2 Zeichen lang sein',
        'contact.notifications.emailInvalid': 'Bitte geben Sie eine gültige E-Mail-Adresse ein',
        'contact.notifications.messageTooShort': 'Die Nachricht muss mindestens 10 Zeichen lang sein',
        'hero.title': 'Verwandeln Sie Ihre Ideen in',
        'hero.titleAccent': 'Ultra-interaktive',
        'hero.titleEnd': 'Web-Erlebnisse',
        'hero.subtitle': 'Mit über 20 Jahren internationaler Erfahrung erstellen wir interaktive, SEO-optimierte Websites, die Sichtbarkeit und Conversions steigern. Spezialisiert auf Angular, React und moderne Webtechnologien.',
        'hero.ctaButton': 'Loslegen',
        'hero.secondaryButton': 'Unsere Arbeiten ansehen',
        'hero.features.performance.title': 'Schnelle Leistung',
        'hero.features.performance.description': 'Blitzschnelle Ladezeiten',
        'hero.features.mobile.title': 'Mobile First',
        'hero.features.mobile.description': 'Responsive auf allen Geräten',
        'hero.features.seo.title': 'SEO Optimiert',
        'hero.features.seo.description': 'Für Suchmaschinen entwickelt',
        'services.title': 'Unsere Premium-Dienstleistungen',
        'services.subtitle': 'Wir liefern hochmoderne Lösungen, die auf Ihre Geschäftsanforderungen zugeschnitten sind',
        'services.learnMore': 'Mehr Erfahren',
        'services.web-design-ux-ui.title': 'Webdesign & UX/UI',
        'services.advanced-frontend-development.title': 'Fortgeschrittene Frontend-Entwicklung',
        'services.technical-consulting-seo.title': 'Technische Beratung & SEO',
        'about.title': 'Über uns',
        'about.description2': 'Jedes Projekt erhält einen personalisierten Ansatz, der sich auf Benutzer und Leistung konzentriert und messbare Ergebnisse für unsere Kunden liefert.',
        'whyChooseUs.title': 'Warum uns wählen',
        'technologies.title': 'Unser Technologie-Stack',
        'portfolio.title': 'Unser Portfolio',
        'portfolio.all': 'Alle',
        'portfolio.web': 'Web',
        'portfolio.mobile': 'Mobil',
        'portfolio.design': 'Design',
    },
    'fr': {
        'navigation.menu': 'Navigation principale',
        'navigation.services': 'Services',
        'navigation.about': 'À propos',
        'navigation.contact': 'Contact',
        'common.language': 'Changer de langue',
        'footer.copyright': '© {{year}} Web Firm Solutions. Tous droits réservés.',
        'footer.websiteAriaLabel': 'Visitez notre site Web sur webfirmsolutions.com',
        'contact.title': 'Travaillons ensemble',
        'contact.subtitle': 'Prêt à transformer vos idées en réalité?',
        'contact.notifications.success': 'Message envoyé avec succès ! Nous vous répondrons bientôt.',
        'contact.notifications.savedLocally': 'Message enregistré localement ! Nous répondrons bientôt par e-mail.',
        'contact.notifications.failed': "Échec de l'envoi du message. Veuillez réessayer ou nous contacter directement.",
        'contact.notifications.captcha': 'Veuillez résoudre correctement le captcha.',
        'contact.notifications.required': 'Veuillez remplir tous les champs obligatoires.',
        'contact.notifications.nameTooShort': 'Le nom doit comporter au moins 2 caractères',
        'contact.notifications.emailInvalid': 'Veuillez saisir une adresse e-mail valide',
        'contact.notifications.messageTooShort': 'Le message doit comporter au moins 10 caractères',
        'hero.title': 'Transformez vos idées en',
        'hero.titleAccent': 'Expériences Web Ultra-interactives',
        'hero.subtitle': "Avec plus de 20 ans d'expérience internationale, nous créons des sites web interactifs et optimisés SEO qui augmentent la visibilité et les conversions. Spécialisés en Angular, React et technologies web modernes.",
        'hero.ctaButton': 'Commencer',
        'hero.secondaryButton': 'Voir Nos Travaux',
        'hero.features.performance.title': 'Performance Rapide',
        'hero.features.performance.description': 'Temps de chargement ultra-rapides',
        'hero.features.mobile.title': 'Mobile First',
        'hero.features.mobile.description': 'Responsive sur tous les appareils',
        'hero.features.seo.title': 'Optimisé SEO',
        'hero.features.seo.description': 'Conçu pour les moteurs de recherche',
        'services.title': 'Nos Services Premium',
        'services.subtitle': 'Nous livrons des solutions de pointe adaptées aux besoins de votre entreprise',
        'services.learnMore': 'En Savoir Plus',
        'services.web-design-ux-ui.title': 'Conception Web & UX/UI',
        'services.advanced-frontend-development.title': 'Développement Frontend Avancé',
        'services.technical-consulting-seo.title': 'Conseil Technique & SEO',
        'about.title': 'À propos de nous',
        'about.description2': 'Chaque projet reçoit une approche personnalisée centrée sur les utilisateurs et la performance, offrant des résultats mesurables pour nos clients.',
        'whyChooseUs.title': 'Pourquoi nous choisir',
        'technologies.title': 'Notre stack technologique',
        'portfolio.title': 'Notre portfolio',
        'portfolio.all': 'Tous',
        'portfolio.web': 'Web',
        'portfolio.mobile': 'Mobile',
        'portfolio.design': 'Design',
    },
}


def get_fallback_text(lang, key_path):
    """Return the built-in text for ``key_path`` or None.

    Languages without a built-in map use the English one.
    """
    texts = FALLBACK_TEXTS.get(lang) or FALLBACK_TEXTS['en']
    return texts.get(key_path)
