"""Curated catalog of reusable themes, components, and page templates."""

THEMES = [
    {
        "id": "purple-pink",
        "name": "Purple Pink",
        "category": "gradient",
        "class_name": "bg-gradient-to-br from-purple-900 via-zinc-900 to-pink-900",
    },
    {
        "id": "ocean-blue",
        "name": "Ocean Blue",
        "category": "gradient",
        "class_name": "bg-gradient-to-br from-blue-900 via-zinc-900 to-cyan-900",
    },
    {
        "id": "emerald-teal",
        "name": "Emerald Teal",
        "category": "gradient",
        "class_name": "bg-gradient-to-br from-emerald-900 via-zinc-900 to-teal-900",
    },
    {
        "id": "sunset",
        "name": "Sunset",
        "category": "gradient",
        "class_name": "bg-gradient-to-br from-orange-900 via-red-900 to-pink-900",
    },
    {
        "id": "mesh-gradient",
        "name": "Mesh Gradient",
        "category": "mesh",
        "class_name": "",
        "style": {
            "background": (
                "radial-gradient(at 40% 20%, hsla(288,80%,42%,0.5) 0px, transparent 50%), "
                "radial-gradient(at 80% 0%, hsla(340,80%,42%,0.4) 0px, transparent 50%), "
                "radial-gradient(at 0% 50%, hsla(220,80%,50%,0.3) 0px, transparent 50%)"
            ),
            "backgroundColor": "#0a0a0a",
        },
    },
    {
        "id": "dot-pattern",
        "name": "Dot Pattern",
        "category": "pattern",
        "class_name": "bg-zinc-900",
        "style": {
            "backgroundImage": "radial-gradient(circle, rgba(255,255,255,0.1) 1px, transparent 1px)",
            "backgroundSize": "20px 20px",
        },
    },
    {
        "id": "grid-pattern",
        "name": "Grid Pattern",
        "category": "pattern",
        "class_name": "bg-zinc-900",
        "style": {
            "backgroundImage": (
                "linear-gradient(rgba(255,255,255,0.05) 1px, transparent 1px), "
                "linear-gradient(90deg, rgba(255,255,255,0.05) 1px, transparent 1px)"
            ),
            "backgroundSize": "30px 30px",
        },
    },
]

COMPONENTS = [
    {
        "id": "glass-navbar",
        "name": "Glass Navbar",
        "category": "navbar",
        "code": """<nav className="fixed top-0 left-0 w-full bg-white/5 backdrop-blur-xl border-b border-white/10 z-50">
  <div className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 flex items-center justify-between h-16">
    <span className="font-bold text-lg text-white">Brand</span>
    <div className="hidden md:flex items-center gap-8">
      <a href="#features" className="text-zinc-400 hover:text-white transition">Features</a>
      <a href="#pricing" className="text-zinc-400 hover:text-white transition">Pricing</a>
      <a href="#contact" className="text-zinc-400 hover:text-white transition">Contact</a>
    </div>
    <a href="/sign-up" className="px-5 py-2 rounded-lg bg-gradient-to-r from-purple-600 to-pink-600 text-white font-medium text-sm hover:opacity-90">
      Get Started
    </a>
  </div>
</nav>""",
    },
    {
        "id": "gradient-hero",
        "name": "Gradient Hero",
        "category": "hero",
        "code": """<section className="relative py-32 px-4 text-center bg-gradient-to-br from-purple-900/40 via-zinc-900 to-pink-900/30">
  <h1 className="text-5xl md:text-6xl font-bold max-w-3xl mx-auto leading-tight text-white">
    Build Something <span className="text-transparent bg-clip-text bg-gradient-to-r from-purple-400 to-pink-500">Amazing</span>
  </h1>
  <p className="text-zinc-400 text-lg md:text-xl mt-6 max-w-xl mx-auto">
    The all-in-one platform to ship your next project in record time.
  </p>
  <div className="mt-8 flex justify-center gap-4">
    <a href="/sign-up" className="px-6 py-3 rounded-xl bg-gradient-to-r from-purple-600 to-pink-600 font-semibold text-white hover:opacity-90">
      Get Started
    </a>
    <a href="#features" className="px-6 py-3 rounded-xl border border-zinc-600 font-semibold text-white hover:bg-zinc-800">
      Learn More
    </a>
  </div>
</section>""",
    },
    {
        "id": "bento-features",
        "name": "Bento Grid Features",
        "category": "features",
        "code": """<section id="features" className="py-24 px-4 max-w-6xl mx-auto">
  <h2 className="text-3xl font-bold text-center text-white mb-12">Features</h2>
  <div className="grid md:grid-cols-3 gap-6">
    <div className="md:col-span-2 bg-zinc-800/60 border border-zinc-700 rounded-2xl p-6 hover:border-purple-500/50 transition-all">
      <h3 className="text-lg font-semibold text-white mb-2">Lightning Fast</h3>
      <p className="text-zinc-400 text-sm">Built for speed from the ground up.</p>
    </div>
    <div className="bg-zinc-800/60 border border-zinc-700 rounded-2xl p-6 hover:border-pink-500/50 transition-all">
      <h3 className="text-lg font-semibold text-white mb-2">Secure</h3>
      <p className="text-zinc-400 text-sm">Enterprise-grade security.</p>
    </div>
    <div className="bg-zinc-800/60 border border-zinc-700 rounded-2xl p-6 hover:border-cyan-500/50 transition-all">
      <h3 className="text-lg font-semibold text-white mb-2">Insightful</h3>
      <p className="text-zinc-400 text-sm">Analytics that explain themselves.</p>
    </div>
  </div>
</section>""",
    },
    {
        "id": "pricing-cards",
        "name": "Pricing Cards",
        "category": "pricing",
        "code": """<section id="pricing" className="py-24 px-4 max-w-5xl mx-auto">
  <h2 className="text-3xl font-bold text-center text-white mb-12">Pricing</h2>
  <div className="grid md:grid-cols-3 gap-6">
    <div className="bg-zinc-800/60 border border-zinc-700 rounded-2xl p-6 flex flex-col">
      <h3 className="text-lg font-semibold text-white">Free</h3>
      <p className="text-3xl font-bold text-white mt-2">$0</p>
      <button className="mt-6 w-full py-3 rounded-lg border border-zinc-600 text-white font-medium hover:bg-zinc-700">Get Started</button>
    </div>
    <div className="bg-gradient-to-b from-purple-900/30 to-zinc-800/60 border border-purple-500/50 rounded-2xl p-6 flex flex-col">
      <h3 className="text-lg font-semibold text-white">Pro</h3>
      <p className="text-3xl font-bold text-white mt-2">$19</p>
      <button className="mt-6 w-full py-3 rounded-lg bg-gradient-to-r from-purple-600 to-pink-600 text-white font-semibold hover:opacity-90">Upgrade</button>
    </div>
    <div className="bg-zinc-800/60 border border-zinc-700 rounded-2xl p-6 flex flex-col">
      <h3 className="text-lg font-semibold text-white">Enterprise</h3>
      <p className="text-3xl font-bold text-white mt-2">Custom</p>
      <button className="mt-6 w-full py-3 rounded-lg border border-zinc-600 text-white font-medium hover:bg-zinc-700">Contact Sales</button>
    </div>
  </div>
</section>""",
    },
    {
        "id": "gradient-cta",
        "name": "Gradient CTA",
        "category": "cta",
        "code": """<section className="py-24 px-4 bg-gradient-to-r from-purple-600/20 via-pink-600/10 to-purple-600/20">
  <div className="max-w-3xl mx-auto text-center">
    <h2 className="text-3xl font-bold text-white mb-4">Ready to Get Started?</h2>
    <p className="text-zinc-400 mb-8">Join thousands of creators building with us.</p>
    <a href="/sign-up" className="inline-block px-8 py-4 rounded-xl bg-gradient-to-r from-purple-600 to-pink-600 text-white font-semibold hover:opacity-90">
      Start Free Trial
    </a>
  </div>
</section>""",
    },
    {
        "id": "simple-footer",
        "name": "Simple Footer",
        "category": "footer",
        "code": """<footer className="py-12 px-4 bg-zinc-900 border-t border-zinc-800">
  <div className="max-w-6xl mx-auto flex flex-col md:flex-row items-center justify-between gap-6">
    <span className="font-bold text-lg text-white">Brand</span>
    <div className="flex gap-6 text-sm text-zinc-400">
      <a href="/privacy" className="hover:text-white">Privacy</a>
      <a href="/terms" className="hover:text-white">Terms</a>
      <a href="/contact" className="hover:text-white">Contact</a>
    </div>
    <span className="text-zinc-500 text-sm">Brand. All rights reserved.</span>
  </div>
</footer>""",
    },
]

PAGE_TEMPLATES = [
    {
        "id": "login-page",
        "name": "Login Page",
        "category": "auth",
        "path": "src/pages/Login.tsx",
        "code": """export default function Login() {
  return (
    <div className="min-h-screen flex items-center justify-center bg-zinc-900 px-4">
      <form className="w-full max-w-sm p-8 rounded-2xl bg-zinc-800/60 border border-zinc-700 space-y-4">
        <h1 className="text-2xl font-bold text-white">Welcome back</h1>
        <input type="email" placeholder="Email" className="w-full px-4 py-3 rounded-lg bg-zinc-900 border border-zinc-700 text-white" />
        <input type="password" placeholder="Password" className="w-full px-4 py-3 rounded-lg bg-zinc-900 border border-zinc-700 text-white" />
        <button type="submit" className="w-full py-3 rounded-lg bg-purple-600 text-white font-semibold hover:bg-purple-700 transition-colors">Sign in</button>
      </form>
    </div>
  );
}""",
    },
    {
        "id": "signup-page",
        "name": "Sign Up Page",
        "category": "auth",
        "path": "src/pages/SignUp.tsx",
        "code": """export default function SignUp() {
  return (
    <div className="min-h-screen flex items-center justify-center bg-zinc-900 px-4">
      <form className="w-full max-w-sm p-8 rounded-2xl bg-zinc-800/60 border border-zinc-700 space-y-4">
        <h1 className="text-2xl font-bold text-white">Create your account</h1>
        <input type="text" placeholder="Name" className="w-full px-4 py-3 rounded-lg bg-zinc-900 border border-zinc-700 text-white" />
        <input type="email" placeholder="Email" className="w-full px-4 py-3 rounded-lg bg-zinc-900 border border-zinc-700 text-white" />
        <input type="password" placeholder="Password" className="w-full px-4 py-3 rounded-lg bg-zinc-900 border border-zinc-700 text-white" />
        <button type="submit" className="w-full py-3 rounded-lg bg-purple-600 text-white font-semibold hover:bg-purple-700 transition-colors">Sign up</button>
      </form>
    </div>
  );
}""",
    },
    {
        "id": "dashboard-page",
        "name": "Dashboard",
        "category": "dashboard",
        "path": "src/pages/Dashboard.tsx",
        "code": """const stats = [
  { label: 'Revenue', value: '$48,200' },
  { label: 'Customers', value: '1,284' },
  { label: 'Orders', value: '312' },
];

export default function Dashboard() {
  return (
    <div className="min-h-screen bg-zinc-900 p-8">
      <h1 className="text-3xl font-bold text-white mb-8">Dashboard</h1>
      <div className="grid md:grid-cols-3 gap-6">
        {stats.map((stat) => (
          <div key={stat.label} className="p-6 rounded-2xl bg-zinc-800/60 border border-zinc-700">
            <p className="text-sm text-zinc-400">{stat.label}</p>
            <p className="text-2xl font-bold text-white mt-2">{stat.value}</p>
          </div>
        ))}
      </div>
    </div>
  );
}""",
    },
    {
        "id": "settings-page",
        "name": "Settings Page",
        "category": "settings",
        "path": "src/pages/Settings.tsx",
        "code": """export default function Settings() {
  return (
    <div className="min-h-screen bg-zinc-900 p-8">
      <h1 className="text-3xl font-bold text-white mb-8">Settings</h1>
      <section className="max-w-xl p-6 rounded-2xl bg-zinc-800/60 border border-zinc-700 space-y-4">
        <label className="block text-sm text-zinc-400">Display name</label>
        <input type="text" className="w-full px-4 py-3 rounded-lg bg-zinc-900 border border-zinc-700 text-white" />
        <button className="px-6 py-3 rounded-lg bg-purple-600 text-white font-semibold hover:bg-purple-700 transition-colors">Save</button>
      </section>
    </div>
  );
}""",
    },
    {
        "id": "landing-page",
        "name": "Landing Page",
        "category": "landing",
        "path": "src/pages/Index.tsx",
        "code": """export default function Index() {
  return (
    <div className="min-h-screen bg-zinc-900">
      <main className="max-w-6xl mx-auto px-4 py-32 text-center">
        <h1 className="text-5xl md:text-7xl font-bold tracking-tight text-white">Your product, beautifully launched</h1>
        <p className="mt-6 text-xl text-zinc-400">Everything you need to turn visitors into customers.</p>
      </main>
    </div>
  );
}""",
    },
    {
        "id": "not-found-page",
        "name": "404 Page",
        "category": "error",
        "path": "src/pages/NotFound.tsx",
        "code": """export default function NotFound() {
  return (
    <div className="min-h-screen flex flex-col items-center justify-center bg-zinc-900 text-center px-4">
      <h1 className="text-7xl font-bold text-white">404</h1>
      <p className="mt-4 text-zinc-400">This page could not be found.</p>
      <a href="/" className="mt-8 px-6 py-3 rounded-lg bg-purple-600 text-white hover:bg-purple-700 transition-colors">Go home</a>
    </div>
  );
}""",
    },
]

CATEGORY_ALIASES = {
    "gradient": ["gradient", "gradients"],
    "mesh": ["mesh"],
    "pattern": ["pattern", "dotted", "grid"],
    "aurora": ["aurora", "northern lights"],
    "navbar": ["navbar", "nav", "navigation", "header"],
    "hero": ["hero", "banner", "header section"],
    "features": ["features", "feature grid", "bento"],
    "pricing": ["pricing", "price", "plans"],
    "cta": ["cta", "call to action"],
    "footer": ["footer"],
    "testimonials": ["testimonials", "reviews", "testimonial"],
    "auth": ["auth", "login", "sign in", "sign up", "register"],
    "dashboard": ["dashboard", "admin"],
    "settings": ["settings", "preferences", "profile"],
    "landing": ["landing page", "home page"],
    "error": ["404", "not found", "error page"],
}
